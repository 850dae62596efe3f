# app/main.py
import logging
from typing import Optional, Set

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.routing import Match
from contextlib import asynccontextmanager

from app.config.settings import settings
from app.core.auth.dependencies import get_current_admin, get_session_gate
from app.core.auth.service import AdminIdentity, SessionGate
from app.core.middleware import setup_exception_handlers, setup_middleware
from app.api.v1.navigation import build_navigation
from app.api.v1.router import api_router
from app.shared.services.backend_client import BackendClient
from app.shared.services.secure_api import SecureAPI

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def _allowed_methods(request: Request) -> Set[str]:
    """Métodos de las rutas conocidas cuyo path coincide pero el método no"""
    allowed: Set[str] = set()
    for route in request.app.router.routes:
        match, _ = route.matches(request.scope)
        if match == Match.PARTIAL:
            allowed.update(getattr(route, "methods", None) or ())
    return allowed


def create_app(backend: Optional[BackendClient] = None) -> FastAPI:
    """Construir la app; `backend` permite inyectar un cliente ya configurado"""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        client = backend or BackendClient(
            settings.supabase_url,
            settings.supabase_anon_key,
            timeout=settings.backend_timeout
        )
        api = SecureAPI(client)
        gate = SessionGate(client, api)

        app.state.backend = client
        app.state.secure_api = api
        app.state.session_gate = gate

        logger.info(f"🚀 {settings.app_name} starting...")
        logger.info(f"📍 Version: {settings.version}")
        logger.info(f"🌍 Environment: {'Development' if settings.debug else 'Production'}")
        logger.info(f"🗄️  Backend: {settings.backend_host}")

        snapshot = await gate.start()
        logger.info(f"🔐 Initial session state: {snapshot.state.value}")

        yield

        # Shutdown
        logger.info(f"🛑 {settings.app_name} shutting down...")
        await gate.close()
        await client.aclose()

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        description="Consola de administración de eMonitor: usuarios, suscripciones, dispositivos y seguridad",
        docs_url="/docs",
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan
    )

    # Setup middleware
    setup_middleware(app)
    setup_exception_handlers(app)

    # Include routers
    app.include_router(api_router, prefix="/api/v1")

    @app.get("/login")
    async def login_page(gate: SessionGate = Depends(get_session_gate)):
        """Pantalla de login; con sesión activa se redirige al shell"""
        if gate.is_authenticated:
            return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
        return {
            "message": "Sign in to the eMonitor admin console",
            "login": "/api/v1/auth/login",
            "method": "POST",
            "fields": ["email", "password"],
            "last_error": gate.last_error
        }

    # Shell de la consola
    @app.get("/")
    async def root(
        current_admin: AdminIdentity = Depends(get_current_admin),
        gate: SessionGate = Depends(get_session_gate)
    ):
        return {
            "message": f"{settings.app_name}",
            "version": settings.version,
            "admin": {
                "id": current_admin.id,
                "email": current_admin.email,
                "role": current_admin.role.value
            },
            "navigation": [item.model_dump(mode="json") for item in build_navigation(gate)],
            "docs": "/docs",
            "api": "/api/v1"
        }

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "version": settings.version,
            "app": settings.app_name,
            "environment": "production" if not settings.debug else "development"
        }

    # Debe registrarse al final: atrapa cualquier ruta desconocida
    @app.api_route("/{full_path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"], include_in_schema=False)
    async def not_found(request: Request, full_path: str):
        allowed = _allowed_methods(request)
        if allowed:
            return JSONResponse(
                status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
                content={"detail": "Method Not Allowed"},
                headers={"Allow": ", ".join(sorted(allowed))}
            )
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "success": False,
                "message": f"Page not found: /{full_path}",
                "home": "/"
            }
        )

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
