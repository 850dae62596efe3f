# app/core/auth/service.py
"""
Gate de sesión del administrador.

Estados: unknown (cargando) -> authenticated | unauthenticated. Cualquier
fallo (credenciales, backend caído o usuario sin rol de admin) termina en
unauthenticated; la causa queda en `last_error` y en los logs.
"""
import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Dict, FrozenSet, List, Optional

from app.shared.services.backend_client import (
    AuthApiError, AuthSession, BackendClient, BackendError, SIGNED_IN, SIGNED_OUT,
)
from app.shared.services.secure_api import SecureAPI

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    UNKNOWN = "unknown"
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


class AdminRole(str, Enum):
    SUPER_ADMIN = "SuperAdmin"
    SUPPORT_ADMIN = "SupportAdmin"
    READ_ONLY = "ReadOnly"


class Capability(str, Enum):
    MODIFY = "modify"
    DELETE = "delete"
    MANAGE_ADMINS = "manage_admins"


ROLE_CAPABILITIES: Dict[AdminRole, FrozenSet[Capability]] = {
    AdminRole.SUPER_ADMIN: frozenset({Capability.MODIFY, Capability.DELETE, Capability.MANAGE_ADMINS}),
    AdminRole.SUPPORT_ADMIN: frozenset({Capability.MODIFY}),
    AdminRole.READ_ONLY: frozenset(),
}


class SignInError(Exception):
    """Fallo de login; `reason` conserva la causa para diagnóstico"""
    reason = "backend_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidCredentialsError(SignInError):
    reason = "invalid_credentials"


class AdminAccessDeniedError(SignInError):
    reason = "not_admin"


@dataclass(frozen=True)
class AdminIdentity:
    id: str
    email: str
    role: AdminRole
    is_active: bool = True


@dataclass(frozen=True)
class SessionSnapshot:
    state: SessionState
    admin: Optional[AdminIdentity]
    is_authenticated: bool
    is_loading: bool


SessionListener = Callable[[SessionSnapshot], Awaitable[None]]


class SessionGate:
    """Contexto de sesión del proceso; se construye una vez en el arranque"""

    def __init__(self, backend: BackendClient, api: SecureAPI):
        self.backend = backend
        self.api = api
        self._state = SessionState.UNKNOWN
        self._admin: Optional[AdminIdentity] = None
        self._is_loading = True
        self._listeners: List[SessionListener] = []
        self._lock = asyncio.Lock()
        self._unsubscribe_backend: Optional[Callable[[], None]] = None
        self.last_error: Optional[str] = None

    # =====================================================
    # ESTADO
    # =====================================================

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def admin(self) -> Optional[AdminIdentity]:
        return self._admin

    @property
    def is_authenticated(self) -> bool:
        return self._state == SessionState.AUTHENTICATED

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            state=self._state,
            admin=self._admin,
            is_authenticated=self.is_authenticated,
            is_loading=self._is_loading,
        )

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Registrar observer de cambios de sesión"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            await listener(snapshot)

    async def _set_authenticated(self, admin: AdminIdentity) -> None:
        self._state = SessionState.AUTHENTICATED
        self._admin = admin
        self._is_loading = False
        self.last_error = None
        await self._notify()

    async def _set_unauthenticated(self, reason: Optional[str] = None) -> None:
        self._state = SessionState.UNAUTHENTICATED
        self._admin = None
        self._is_loading = False
        if reason is not None:
            self.last_error = reason
        await self._notify()

    # =====================================================
    # CICLO DE VIDA
    # =====================================================

    async def start(self) -> SessionSnapshot:
        """Suscribirse a eventos del backend y verificar la sesión existente"""
        if self._unsubscribe_backend is None:
            self._unsubscribe_backend = self.backend.on_auth_state_change(self._handle_auth_event)
        return await self.check_session()

    async def close(self) -> None:
        if self._unsubscribe_backend is not None:
            self._unsubscribe_backend()
            self._unsubscribe_backend = None
        self._listeners.clear()

    async def _handle_auth_event(self, event: str, session: Optional[AuthSession]) -> None:
        if event == SIGNED_OUT:
            if self._state != SessionState.UNAUTHENTICATED:
                logger.info("[Auth] Backend signed out, clearing admin session")
                await self._set_unauthenticated()
        elif event == SIGNED_IN and session is not None:
            # Los logins propios ya resuelven el rol dentro del lock
            if self._lock.locked() or self.is_authenticated:
                return
            await self.check_session()

    # =====================================================
    # OPERACIONES
    # =====================================================

    async def _resolve_admin(self, session: AuthSession) -> AdminIdentity:
        admin_info = await self.api.get_current_admin()
        if not admin_info or not admin_info.get("is_active"):
            raise AdminAccessDeniedError("You do not have admin access")
        try:
            role = AdminRole(admin_info["admin_role"])
        except ValueError:
            raise AdminAccessDeniedError(f"Unknown admin role: {admin_info['admin_role']}")
        return AdminIdentity(
            id=session.user_id,
            email=session.email or admin_info.get("email", ""),
            role=role,
            is_active=True,
        )

    async def _teardown_remote(self) -> None:
        try:
            await self.backend.sign_out()
        except BackendError as e:
            logger.error(f"[Auth] Remote sign-out failed: {e.message}")

    async def sign_in(self, email: str, password: str) -> AdminIdentity:
        """Login de administrador; el estado solo cambia con éxito completo"""
        async with self._lock:
            logger.info(f"[SignIn] Starting login for: {email}")
            try:
                session = await self.backend.sign_in_with_password(email, password)
            except AuthApiError as e:
                logger.warning(f"[SignIn] Auth error: {e.message}")
                await self._teardown_remote()
                await self._set_unauthenticated(InvalidCredentialsError.reason)
                raise InvalidCredentialsError(e.message) from e
            except BackendError as e:
                logger.error(f"[SignIn] Backend error: {e.message}")
                await self._teardown_remote()
                await self._set_unauthenticated(SignInError.reason)
                raise SignInError(e.message) from e

            try:
                admin = await self._resolve_admin(session)
            except AdminAccessDeniedError:
                logger.warning(f"[SignIn] User {session.user_id} not authorized as admin")
                await self._teardown_remote()
                await self._set_unauthenticated(AdminAccessDeniedError.reason)
                raise
            except BackendError as e:
                logger.error(f"[SignIn] Admin role lookup failed: {e.message}")
                await self._teardown_remote()
                await self._set_unauthenticated(SignInError.reason)
                raise AdminAccessDeniedError("You do not have admin access") from e

            await self._set_authenticated(admin)
            logger.info(f"[SignIn] Login successful: {admin.email} ({admin.role.value})")
            return admin

    async def check_session(self) -> SessionSnapshot:
        """Restaurar la sesión existente del backend; nunca lanza excepción"""
        async with self._lock:
            self._is_loading = True
            try:
                session = await self.backend.get_session()
                if session is None:
                    logger.info("[Auth] No active session")
                    await self._set_unauthenticated()
                    return self.snapshot()

                logger.info("[Auth] Session found, checking admin role...")
                try:
                    admin = await self._resolve_admin(session)
                except AdminAccessDeniedError:
                    logger.warning("[Auth] User not authorized as admin")
                    await self._teardown_remote()
                    await self._set_unauthenticated(AdminAccessDeniedError.reason)
                    return self.snapshot()

                await self._set_authenticated(admin)
                logger.info(f"[Auth] Admin authenticated successfully: {admin.email}")
            except BackendError as e:
                logger.error(f"[Auth] Session check failed: {e}")
                await self._set_unauthenticated(SignInError.reason)
            return self.snapshot()

    async def sign_out(self) -> None:
        """Cerrar sesión remota y limpiar estado local sin condiciones"""
        async with self._lock:
            try:
                await self.backend.sign_out()
            finally:
                await self._set_unauthenticated()
                logger.info("[Auth] Admin signed out")

    async def logout(self) -> None:
        await self.sign_out()

    # =====================================================
    # PERMISOS
    # =====================================================

    def has_capability(self, capability: Capability) -> bool:
        if self._admin is None:
            return False
        return capability in ROLE_CAPABILITIES.get(self._admin.role, frozenset())

    def can_modify(self) -> bool:
        return self.has_capability(Capability.MODIFY)

    def can_delete(self) -> bool:
        return self.has_capability(Capability.DELETE)

    def can_manage_admins(self) -> bool:
        return self.has_capability(Capability.MANAGE_ADMINS)
