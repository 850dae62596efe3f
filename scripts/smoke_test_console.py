#!/usr/bin/env python3
"""
Script de pruebas de humo para la consola eMonitor
Ejecutar desde la raíz del proyecto: python scripts/smoke_test_console.py

Solo realiza lecturas: inicia sesión, recorre cada página y cierra sesión.
"""

import os
import asyncio

import httpx

# Configuración de la API
BASE_URL = os.getenv("CONSOLE_URL", "http://localhost:8000")
API_URL = f"{BASE_URL}/api/v1"
CREDENTIALS = {
    "email": os.getenv("ADMIN_EMAIL", "admin@emonitor.app"),
    "password": os.getenv("ADMIN_PASSWORD", ""),
}

PAGES = [
    ("Overview", "/overview"),
    ("Users", "/users"),
    ("Subscriptions", "/subscriptions"),
    ("Devices", "/devices"),
    ("Email Pool", "/email-pool"),
    ("Promotions", "/promotions"),
    ("Plans", "/plans"),
    ("Security", "/security/blocked-ips"),
    ("Suspicious Logins", "/login-monitoring/suspicious"),
    ("Multi-Device Logins", "/login-monitoring/multi-device"),
    ("Analytics", "/analytics"),
    ("Audit Log", "/audit?limit=20"),
    ("Emergency Alerts", "/emergency-alerts"),
    ("Trial Settings", "/trial-settings"),
]


class ConsoleTester:
    def __init__(self):
        self.client = httpx.AsyncClient(base_url=API_URL, follow_redirects=False)
        self.admin = None

    async def login(self):
        """Iniciar sesión con el administrador configurado"""
        print("🔐 Realizando login...")

        response = await self.client.post("/auth/login", json=CREDENTIALS)
        if response.status_code != 200:
            print(f"❌ Error login: {response.status_code} {response.json().get('detail')}")
            return False

        self.admin = response.json()["admin"]
        print(f"✅ Login exitoso: {self.admin['email']} ({self.admin['role']})")
        return True

    async def test_session(self):
        """Verificar el estado de la sesión y los permisos"""
        print("\n🪪 Test: Estado de sesión")

        session = (await self.client.get("/auth/session")).json()
        permissions = (await self.client.get("/auth/check-permissions")).json()
        print(f"   Estado: {session['state']}")
        print(f"   Permisos: {', '.join(permissions['permissions']) or 'solo lectura'}")
        return session["is_authenticated"]

    async def test_navigation(self):
        """Listar la navegación visible para el rol"""
        print("\n🧭 Test: Navegación")

        response = await self.client.get("/navigation")
        if response.status_code != 200:
            print(f"❌ Error navegación: {response.status_code}")
            return False

        for item in response.json():
            print(f"   • {item['name']} → {item['href']}")
        return True

    async def test_pages(self):
        """Cargar cada página de la consola"""
        print("\n📊 Test: Páginas")

        failures = 0
        pages = list(PAGES)
        if self.admin and self.admin["role"] == "SuperAdmin":
            pages.append(("Admins", "/admins"))

        for name, path in pages:
            try:
                response = await self.client.get(path)
            except httpx.HTTPError as e:
                print(f"❌ Excepción {name}: {e}")
                failures += 1
                continue

            if response.status_code == 200:
                data = response.json()
                total = data.get("total") if isinstance(data, dict) else len(data)
                suffix = f" ({total} registros)" if total is not None else ""
                print(f"✅ {name}{suffix}")
            else:
                print(f"❌ Error {name}: {response.status_code}")
                failures += 1

        return failures == 0

    async def logout(self):
        """Cerrar sesión"""
        response = await self.client.post("/auth/logout")
        print(f"\n👋 Logout: {response.status_code}")

    async def run(self):
        """Ejecutar la prueba completa"""
        print("🚀 INICIANDO PRUEBA DE HUMO DE LA CONSOLA")
        print("=" * 60)

        if not await self.login():
            print("❌ Falló el login, abortando")
            return False

        try:
            ok = await self.test_session()
            ok = await self.test_navigation() and ok
            ok = await self.test_pages() and ok
        finally:
            await self.logout()

        print("\n" + "=" * 60)
        print("🎉 PRUEBA FINALIZADA" if ok else "❌ ALGUNAS PÁGINAS FALLARON")
        return ok

    async def cleanup(self):
        """Limpiar recursos"""
        await self.client.aclose()


async def main():
    """Función principal"""
    tester = ConsoleTester()
    try:
        await tester.run()
    except KeyboardInterrupt:
        print("\n⚠️ Prueba interrumpida por usuario")
    finally:
        await tester.cleanup()


if __name__ == "__main__":
    print("🧪 PRUEBA DE HUMO eMonitor")
    print("📋 Asegúrate de que:")
    print(f"   - El servidor esté corriendo en {BASE_URL}")
    print("   - ADMIN_EMAIL y ADMIN_PASSWORD apunten a una cuenta con rol admin")
    print()

    asyncio.run(main())
