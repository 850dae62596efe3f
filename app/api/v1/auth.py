from fastapi import APIRouter, Depends, HTTPException, status

from app.core.auth.dependencies import get_current_admin, get_session_gate
from app.core.auth.schemas import (
    AdminResponse, LoginRequest, LoginResponse, PermissionsResponse, SessionResponse,
)
from app.core.auth.service import (
    AdminIdentity, ROLE_CAPABILITIES, SessionGate, SessionSnapshot, SignInError,
)
from app.shared.schemas.common import BaseResponse

router = APIRouter()


def _admin_response(admin: AdminIdentity) -> AdminResponse:
    return AdminResponse(
        id=admin.id,
        email=admin.email,
        role=admin.role.value,
        is_active=admin.is_active,
    )


def _session_response(snapshot: SessionSnapshot, gate: SessionGate) -> SessionResponse:
    return SessionResponse(
        state=snapshot.state.value,
        is_authenticated=snapshot.is_authenticated,
        is_loading=snapshot.is_loading,
        admin=_admin_response(snapshot.admin) if snapshot.admin else None,
        last_error=gate.last_error,
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    gate: SessionGate = Depends(get_session_gate)
):
    """
    Login de administrador

    **Proceso:**
    1. Autentica email/contraseña contra el backend
    2. Consulta el rol de admin con el RPC privilegiado
    3. Sin rol activo se cierra la sesión remota y se rechaza el acceso
    """
    try:
        admin = await gate.sign_in(credentials.email, credentials.password)
    except SignInError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    return LoginResponse(
        success=True,
        message="Login successful",
        admin=_admin_response(admin)
    )


@router.post("/logout", response_model=BaseResponse)
async def logout(gate: SessionGate = Depends(get_session_gate)):
    """Cerrar sesión en el backend y limpiar el estado local"""
    await gate.logout()
    return BaseResponse(success=True, message="Signed out")


@router.get("/session", response_model=SessionResponse)
async def check_session(gate: SessionGate = Depends(get_session_gate)):
    """Re-verificar la sesión existente del backend (p. ej. tras recargar)"""
    snapshot = await gate.check_session()
    return _session_response(snapshot, gate)


@router.get("/me", response_model=AdminResponse)
async def get_me(current_admin: AdminIdentity = Depends(get_current_admin)):
    """Obtener información del admin actual"""
    return _admin_response(current_admin)


@router.get("/check-permissions", response_model=PermissionsResponse)
async def check_permissions(
    current_admin: AdminIdentity = Depends(get_current_admin),
    gate: SessionGate = Depends(get_session_gate)
):
    """Verificar permisos del admin actual"""
    capabilities = ROLE_CAPABILITIES.get(current_admin.role, frozenset())
    return PermissionsResponse(
        admin=_admin_response(current_admin),
        permissions=sorted(c.value for c in capabilities),
        can={
            "modify": gate.can_modify(),
            "delete": gate.can_delete(),
            "manage_admins": gate.can_manage_admins(),
        }
    )
