from fastapi import Depends, HTTPException, Request, status
from typing import Callable

from app.shared.services.secure_api import SecureAPI
from app.core.auth.service import AdminIdentity, Capability, SessionGate


class LoginRequiredError(Exception):
    """Ruta protegida sin sesión de admin; se responde con redirect a /login"""

    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(detail)
        self.detail = detail


class AuthorizationError(HTTPException):
    def __init__(self, detail: str = "Not enough permissions"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail
        )


def get_session_gate(request: Request) -> SessionGate:
    """Gate de sesión creado en el lifespan de la app"""
    return request.app.state.session_gate


def get_secure_api(request: Request) -> SecureAPI:
    """Gateway hacia el backend"""
    return request.app.state.secure_api


async def get_current_admin(gate: SessionGate = Depends(get_session_gate)) -> AdminIdentity:
    """Obtener admin actual; sin sesión se redirige al login"""
    if not gate.is_authenticated or gate.admin is None:
        raise LoginRequiredError()
    return gate.admin


def require_capability(capability: Capability):
    """Factory para crear dependency que requiere una capacidad del rol"""
    def capability_checker(
        current_admin: AdminIdentity = Depends(get_current_admin),
        gate: SessionGate = Depends(get_session_gate),
    ) -> AdminIdentity:
        if not gate.has_capability(capability):
            raise AuthorizationError(
                f"Rol '{current_admin.role.value}' no autorizado para '{capability.value}'"
            )
        return current_admin
    return capability_checker


# Dependencies específicas por capacidad
require_modify: Callable[..., AdminIdentity] = require_capability(Capability.MODIFY)
require_delete: Callable[..., AdminIdentity] = require_capability(Capability.DELETE)
require_manage_admins: Callable[..., AdminIdentity] = require_capability(Capability.MANAGE_ADMINS)
