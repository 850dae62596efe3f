"""
In-memory stand-in for the hosted backend, served through
`httpx.MockTransport`.

It speaks the auth endpoints (`/auth/v1/token|user|logout`), PostgREST-style
table access (`eq.`/`in.()`/`is.null` filters, `order`, `limit`, single-object
reads) and `/rest/v1/rpc/<fn>` calls, so the real `BackendClient` code path is
exercised end to end.
"""

import json
import time
import uuid
from typing import Any, Callable, Dict, List, Optional

import httpx
from jose import jwt

from app.shared.services.backend_client import BackendClient

BACKEND_URL = "https://backend.test"
ANON_KEY = "anon-test-key"
JWT_SECRET = "fake-backend-secret"
PASSWORD = "secret123"

SUPER_ADMIN = "super@emonitor-admin.com"
SUPPORT_ADMIN = "support@emonitor-admin.com"
READ_ONLY = "readonly@emonitor-admin.com"
PLAIN_USER = "user@emonitor-admin.com"

RpcHandler = Callable[[Dict[str, Any]], Any]


def _json(status_code: int, body: Any = None) -> httpx.Response:
    if body is None:
        return httpx.Response(status_code)
    return httpx.Response(status_code, json=body)


def _body(request: httpx.Request) -> Any:
    return json.loads(request.content) if request.content else {}


def _matches(row: Dict[str, Any], column: str, expression: str) -> bool:
    value = row.get(column)
    if expression == "is.null":
        return value is None
    if isinstance(value, bool):
        value = str(value).lower()
    if expression.startswith("eq."):
        return str(value) == expression[3:]
    if expression.startswith("in.(") and expression.endswith(")"):
        return str(value) in expression[4:-1].split(",")
    raise AssertionError(f"Unsupported filter: {column}={expression}")


class FakeBackend:
    """Backend en memoria: auth, tablas y RPCs registrados"""

    def __init__(self):
        self.accounts: Dict[str, Dict[str, Any]] = {}
        self.admin_roles: Dict[str, str] = {}
        self.access_tokens: Dict[str, str] = {}
        self.refresh_tokens: Dict[str, str] = {}
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.rpc_handlers: Dict[str, RpcHandler] = {}
        self.rpc_errors: Dict[str, Any] = {}
        self.rpc_calls: List[tuple] = []
        self.requests: List[httpx.Request] = []
        self.token_ttl = 3600
        self.send_expiry = True
        self.down = False
        self.logout_status = 204

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------

    def add_account(self, email: str, password: str = PASSWORD, role: Optional[str] = None) -> str:
        user_id = str(uuid.uuid4())
        self.accounts[email] = {"id": user_id, "email": email, "password": password}
        if role:
            self.admin_roles[user_id] = role
        return user_id

    def user_id(self, email: str) -> str:
        return self.accounts[email]["id"]

    def on_rpc(self, function: str, handler: RpcHandler) -> None:
        self.rpc_handlers[function] = handler

    def fail_rpc(self, function: str, status_code: int = 400, message: str = "RPC failed", code: str = "P0001"):
        self.rpc_errors[function] = (status_code, {"message": message, "code": code, "details": None, "hint": None})

    def calls_to(self, function: str) -> List[Dict[str, Any]]:
        return [params for name, params in self.rpc_calls if name == function]

    def revoke_all_tokens(self) -> None:
        self.access_tokens.clear()
        self.refresh_tokens.clear()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.down:
            raise httpx.ConnectError("backend unreachable", request=request)

        path = request.url.path
        if path.startswith("/auth/v1/"):
            return self._auth(request, path[len("/auth/v1/"):])
        if path.startswith("/rest/v1/rpc/"):
            return self._rpc(request, path[len("/rest/v1/rpc/"):])
        if path.startswith("/rest/v1/"):
            return self._table(request, path[len("/rest/v1/"):])
        return _json(404, {"message": "Not found"})

    def _current_user(self, request: httpx.Request) -> Optional[Dict[str, Any]]:
        token = request.headers.get("Authorization", "").replace("Bearer ", "")
        user_id = self.access_tokens.get(token)
        if user_id is None:
            return None
        for account in self.accounts.values():
            if account["id"] == user_id:
                return {"id": account["id"], "email": account["email"], "aud": "authenticated"}
        return None

    def _issue_tokens(self, account: Dict[str, Any]) -> Dict[str, Any]:
        exp = int(time.time()) + self.token_ttl
        access = jwt.encode(
            {"sub": account["id"], "email": account["email"], "exp": exp, "jti": uuid.uuid4().hex},
            JWT_SECRET,
            algorithm="HS256",
        )
        refresh = uuid.uuid4().hex
        self.access_tokens[access] = account["id"]
        self.refresh_tokens[refresh] = account["id"]
        payload = {
            "access_token": access,
            "refresh_token": refresh,
            "token_type": "bearer",
            "user": {"id": account["id"], "email": account["email"]},
        }
        if self.send_expiry:
            payload["expires_in"] = self.token_ttl
        return payload

    def _auth(self, request: httpx.Request, endpoint: str) -> httpx.Response:
        if endpoint == "token":
            data = _body(request)
            grant_type = request.url.params.get("grant_type")

            if grant_type == "password":
                account = self.accounts.get(data.get("email"))
                if account is None or account["password"] != data.get("password"):
                    return _json(400, {"error": "invalid_grant", "error_description": "Invalid login credentials"})
                return _json(200, self._issue_tokens(account))

            if grant_type == "refresh_token":
                user_id = self.refresh_tokens.pop(data.get("refresh_token"), None)
                account = next((a for a in self.accounts.values() if a["id"] == user_id), None)
                if account is None:
                    return _json(400, {"error": "invalid_grant", "error_description": "Invalid Refresh Token"})
                return _json(200, self._issue_tokens(account))

            return _json(400, {"error": "unsupported_grant_type"})

        if endpoint == "user":
            user = self._current_user(request)
            if user is None:
                return _json(401, {"code": 401, "msg": "Invalid JWT"})
            return _json(200, user)

        if endpoint == "logout":
            token = request.headers.get("Authorization", "").replace("Bearer ", "")
            user_id = self.access_tokens.pop(token, None)
            if user_id is not None:
                self.refresh_tokens = {k: v for k, v in self.refresh_tokens.items() if v != user_id}
            if self.logout_status != 204:
                return _json(self.logout_status, {"msg": "logout failed"})
            return _json(204)

        return _json(404, {"msg": "Not found"})

    def _rpc(self, request: httpx.Request, function: str) -> httpx.Response:
        params = _body(request)
        self.rpc_calls.append((function, params))

        if function in self.rpc_errors:
            status_code, body = self.rpc_errors[function]
            return _json(status_code, body)

        if function == "get_admin_role" and function not in self.rpc_handlers:
            return _json(200, self.admin_roles.get(params.get("user_uuid")))

        handler = self.rpc_handlers.get(function)
        if handler is None:
            return _json(404, {"message": f"Could not find the function public.{function}", "code": "PGRST202"})
        return _json(200, handler(params))

    def _filtered(self, table: str, params: Dict[str, str]) -> List[Dict[str, Any]]:
        rows = self.tables.setdefault(table, [])
        filters = {k: v for k, v in params.items() if k not in ("select", "order", "limit")}
        return [r for r in rows if all(_matches(r, c, e) for c, e in filters.items())]

    def _table(self, request: httpx.Request, table: str) -> httpx.Response:
        params = dict(request.url.params)
        method = request.method

        if method == "GET":
            rows = [dict(r) for r in self._filtered(table, params)]
            if "order" in params:
                column, _, direction = params["order"].partition(".")
                rows.sort(key=lambda r: (r.get(column) is None, r.get(column)), reverse=direction == "desc")
            if "limit" in params:
                rows = rows[:int(params["limit"])]
            if request.headers.get("Accept") == "application/vnd.pgrst.object+json":
                if len(rows) != 1:
                    return _json(406, {
                        "message": "JSON object requested, multiple (or no) rows returned",
                        "code": "PGRST116",
                        "details": f"The result contains {len(rows)} rows",
                    })
                return _json(200, rows[0])
            return _json(200, rows)

        if method == "POST":
            row = _body(request)
            row.setdefault("id", str(uuid.uuid4()))
            row.setdefault("created_at", time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime()))
            self.tables.setdefault(table, []).append(row)
            return _json(201, [dict(row)])

        if method == "PATCH":
            values = _body(request)
            updated = []
            for row in self._filtered(table, params):
                row.update(values)
                updated.append(dict(row))
            return _json(200, updated)

        if method == "DELETE":
            doomed = self._filtered(table, params)
            self.tables[table] = [r for r in self.tables.get(table, []) if r not in doomed]
            return _json(200, [dict(r) for r in doomed])

        return _json(405, {"message": "Method not allowed"})


def make_backend_client(fake: FakeBackend) -> BackendClient:
    return BackendClient(BACKEND_URL, ANON_KEY, transport=httpx.MockTransport(fake.handler))
