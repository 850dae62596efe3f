# app/shared/services/backend_client.py
import time
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Union

import httpx
from jose import jwt, JWTError
from pydantic import BaseModel

logger = logging.getLogger(__name__)

# Eventos del stream de autenticación
SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"
TOKEN_REFRESHED = "TOKEN_REFRESHED"

# Margen antes de la expiración para refrescar el token
EXPIRY_MARGIN_SECONDS = 10

FilterValue = Union[str, int, float, bool, None, Sequence[Any]]


class BackendError(Exception):
    """Error devuelto por el backend (tabla, RPC o auth)"""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[str] = None,
        hint: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details
        self.hint = hint
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "details": self.details,
            "hint": self.hint,
            "status_code": self.status_code,
        }


class AuthApiError(BackendError):
    """Error de los endpoints de autenticación"""


class AuthSession(BaseModel):
    """Sesión emitida por el backend"""
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    expires_at: Optional[int] = None
    user: Dict[str, Any]

    @property
    def user_id(self) -> str:
        return self.user["id"]

    @property
    def email(self) -> Optional[str]:
        return self.user.get("email")

    def is_expired(self, now: Optional[float] = None) -> bool:
        if self.expires_at is None:
            return False
        now = time.time() if now is None else now
        return self.expires_at - EXPIRY_MARGIN_SECONDS <= now


AuthListener = Callable[[str, Optional[AuthSession]], Awaitable[None]]


def _token_expiry(payload: Dict[str, Any]) -> Optional[int]:
    """Obtener expiración desde la respuesta o desde el claim exp del JWT"""
    if payload.get("expires_at"):
        return int(payload["expires_at"])
    if payload.get("expires_in"):
        return int(time.time()) + int(payload["expires_in"])
    try:
        claims = jwt.get_unverified_claims(payload["access_token"])
    except JWTError:
        return None
    exp = claims.get("exp")
    return int(exp) if exp is not None else None


def _error_from_response(response: httpx.Response, error_cls=BackendError) -> BackendError:
    """Normalizar errores de PostgREST y GoTrue"""
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    message = (
        body.get("message")
        or body.get("error_description")
        or body.get("msg")
        or body.get("error")
        or response.text
        or f"HTTP {response.status_code}"
    )
    code = body.get("code") or body.get("error_code") or body.get("error")
    return error_cls(
        message=str(message),
        code=str(code) if code is not None else None,
        details=body.get("details"),
        hint=body.get("hint"),
        status_code=response.status_code,
    )


def _encode_filter(value: FilterValue) -> str:
    if isinstance(value, (list, tuple, set)):
        items = ",".join(str(v) for v in value)
        return f"in.({items})"
    if value is None:
        return "is.null"
    if isinstance(value, bool):
        return f"eq.{str(value).lower()}"
    return f"eq.{value}"


class BackendClient:
    """Cliente para el backend hospedado (auth, tablas y RPCs)"""

    def __init__(
        self,
        url: str,
        api_key: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = url.rstrip("/")
        self.api_key = api_key
        client_kwargs: Dict[str, Any] = {"base_url": self.base_url}
        if timeout is not None:
            client_kwargs["timeout"] = timeout
        if transport is not None:
            client_kwargs["transport"] = transport
        self._http = httpx.AsyncClient(**client_kwargs)
        self._session: Optional[AuthSession] = None
        self._listeners: List[AuthListener] = []

    async def aclose(self) -> None:
        await self._http.aclose()

    # =====================================================
    # AUTH EVENTS
    # =====================================================

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        """Registrar listener de eventos de auth; retorna función para desuscribir"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _emit(self, event: str, session: Optional[AuthSession]) -> None:
        for listener in list(self._listeners):
            try:
                await listener(event, session)
            except Exception:
                logger.exception(f"Auth listener failed handling {event}")

    # =====================================================
    # HEADERS / REQUESTS
    # =====================================================

    def _headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        token = self._session.access_token if self._session else self.api_key
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {token}",
        }
        if extra:
            headers.update(extra)
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
        error_cls=BackendError,
    ) -> Any:
        try:
            response = await self._http.request(
                method,
                path,
                params=params,
                json=json,
                headers=self._headers(headers),
            )
        except httpx.TimeoutException as e:
            logger.error(f"Timeout calling backend {method} {path}")
            raise BackendError("Backend request timed out", code="timeout") from e
        except httpx.HTTPError as e:
            logger.error(f"Error communicating with backend {method} {path}: {e}")
            raise BackendError(f"Error communicating with backend: {e}", code="network_error") from e

        if response.status_code >= 400:
            raise _error_from_response(response, error_cls)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # =====================================================
    # AUTH
    # =====================================================

    def _store_session(self, payload: Dict[str, Any]) -> AuthSession:
        session = AuthSession(
            access_token=payload["access_token"],
            refresh_token=payload.get("refresh_token"),
            token_type=payload.get("token_type", "bearer"),
            expires_at=_token_expiry(payload),
            user=payload.get("user") or {},
        )
        self._session = session
        return session

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Login con email/password (grant_type=password)"""
        payload = await self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
            error_cls=AuthApiError,
        )
        if not payload or not payload.get("user"):
            raise AuthApiError("Authentication failed", status_code=401)

        session = self._store_session(payload)
        logger.info(f"Backend session created for user {session.user_id}")
        await self._emit(SIGNED_IN, session)
        return session

    async def refresh_session(self) -> Optional[AuthSession]:
        """Refrescar el token; si falla la sesión se descarta"""
        if self._session is None or not self._session.refresh_token:
            return None

        try:
            payload = await self._request(
                "POST",
                "/auth/v1/token",
                params={"grant_type": "refresh_token"},
                json={"refresh_token": self._session.refresh_token},
                error_cls=AuthApiError,
            )
        except AuthApiError as e:
            logger.warning(f"Token refresh rejected: {e.message}")
            self._session = None
            await self._emit(SIGNED_OUT, None)
            return None

        session = self._store_session(payload)
        await self._emit(TOKEN_REFRESHED, session)
        return session

    async def get_session(self) -> Optional[AuthSession]:
        """Sesión actual, refrescada si el access token expiró"""
        if self._session is None:
            return None
        if self._session.is_expired():
            return await self.refresh_session()
        return self._session

    async def get_user(self) -> Optional[Dict[str, Any]]:
        """Usuario validado contra el backend (None si no hay sesión)"""
        session = await self.get_session()
        if session is None:
            return None
        user = await self._request("GET", "/auth/v1/user", error_cls=AuthApiError)
        return user or None

    async def sign_out(self) -> None:
        """Invalidar la sesión remota; la sesión local se descarta siempre"""
        had_session = self._session is not None
        try:
            if had_session:
                try:
                    await self._request("POST", "/auth/v1/logout", error_cls=AuthApiError)
                except AuthApiError as e:
                    # 401/404: la sesión ya no existe en el backend
                    if e.status_code not in (401, 403, 404):
                        raise
        finally:
            self._session = None
            if had_session:
                await self._emit(SIGNED_OUT, None)

    # =====================================================
    # TABLES (PostgREST)
    # =====================================================

    @staticmethod
    def _query_params(
        columns: str = "*",
        filters: Optional[Dict[str, FilterValue]] = None,
        order: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Dict[str, str]:
        params = {"select": columns}
        for column, value in (filters or {}).items():
            params[column] = _encode_filter(value)
        if order:
            params["order"] = order
        if limit is not None:
            params["limit"] = str(limit)
        return params

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[Dict[str, FilterValue]] = None,
        order: Optional[str] = None,
        limit: Optional[int] = None,
        single: bool = False,
    ) -> Any:
        """Leer filas de una tabla; `single` exige exactamente una fila"""
        headers = {"Accept": "application/vnd.pgrst.object+json"} if single else None
        data = await self._request(
            "GET",
            f"/rest/v1/{table}",
            params=self._query_params(columns, filters, order, limit),
            headers=headers,
        )
        if single:
            return data
        return data or []

    async def insert(self, table: str, row: Dict[str, Any]) -> List[Dict[str, Any]]:
        data = await self._request(
            "POST",
            f"/rest/v1/{table}",
            json=row,
            headers={"Prefer": "return=representation"},
        )
        return data or []

    async def update(
        self,
        table: str,
        values: Dict[str, Any],
        filters: Dict[str, FilterValue],
    ) -> List[Dict[str, Any]]:
        data = await self._request(
            "PATCH",
            f"/rest/v1/{table}",
            params=self._query_params(filters=filters),
            json=values,
            headers={"Prefer": "return=representation"},
        )
        return data or []

    async def delete(self, table: str, filters: Dict[str, FilterValue]) -> List[Dict[str, Any]]:
        data = await self._request(
            "DELETE",
            f"/rest/v1/{table}",
            params=self._query_params(filters=filters),
            headers={"Prefer": "return=representation"},
        )
        return data or []

    # =====================================================
    # RPC
    # =====================================================

    async def rpc(self, function: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Invocar un procedimiento remoto"""
        return await self._request("POST", f"/rest/v1/rpc/{function}", json=params or {})
