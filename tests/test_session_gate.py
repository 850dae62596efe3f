"""Session/authorization gate: sign-in, session restore, sign-out and roles."""

import pytest

from app.core.auth.service import (
    AdminAccessDeniedError, AdminRole, InvalidCredentialsError, SessionState,
    SessionGate, SignInError,
)
from app.shared.services.backend_client import AuthApiError
from app.shared.services.secure_api import SecureAPI
from fake_backend import (
    PASSWORD, PLAIN_USER, READ_ONLY, SUPER_ADMIN, SUPPORT_ADMIN, make_backend_client,
)


class SnapshotRecorder:
    def __init__(self):
        self.snapshots = []

    async def __call__(self, snapshot):
        self.snapshots.append(snapshot)

    @property
    def states(self):
        return [s.state for s in self.snapshots]


def test_initial_state_is_loading(gate):
    snapshot = gate.snapshot()

    assert snapshot.state == SessionState.UNKNOWN
    assert snapshot.is_loading is True
    assert snapshot.is_authenticated is False
    assert snapshot.admin is None


# ---------------------------------------------------------------------------
# sign_in
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_sign_in_as_super_admin(gate, fake_backend):
    admin = await gate.sign_in(SUPER_ADMIN, PASSWORD)

    assert admin.role == AdminRole.SUPER_ADMIN
    assert admin.id == fake_backend.user_id(SUPER_ADMIN)
    assert admin.email == SUPER_ADMIN
    assert gate.is_authenticated
    assert gate.is_loading is False
    assert gate.admin == admin
    assert gate.last_error is None


@pytest.mark.asyncio
async def test_sign_in_notifies_once(gate):
    recorder = SnapshotRecorder()
    gate.subscribe(recorder)

    await gate.sign_in(SUPPORT_ADMIN, PASSWORD)

    assert recorder.states == [SessionState.AUTHENTICATED]
    assert recorder.snapshots[0].admin.role == AdminRole.SUPPORT_ADMIN


@pytest.mark.asyncio
async def test_sign_in_wrong_password(gate, fake_backend):
    with pytest.raises(InvalidCredentialsError) as exc_info:
        await gate.sign_in(SUPER_ADMIN, "wrong-password")

    assert isinstance(exc_info.value.__cause__, AuthApiError)
    assert gate.state == SessionState.UNAUTHENTICATED
    assert gate.admin is None
    assert gate.is_loading is False
    assert gate.last_error == "invalid_credentials"
    assert fake_backend.calls_to("get_admin_role") == []


@pytest.mark.asyncio
async def test_failed_sign_in_drops_previous_backend_session(gate, backend_client):
    await gate.sign_in(SUPER_ADMIN, PASSWORD)

    with pytest.raises(InvalidCredentialsError):
        await gate.sign_in(SUPER_ADMIN, "wrong-password")

    assert await backend_client.get_session() is None
    snapshot = await gate.check_session()
    assert snapshot.state == SessionState.UNAUTHENTICATED
    assert snapshot.admin is None


@pytest.mark.asyncio
async def test_unreachable_backend_on_sign_in_drops_previous_session(gate, backend_client, fake_backend):
    await gate.sign_in(SUPPORT_ADMIN, PASSWORD)
    fake_backend.down = True

    with pytest.raises(SignInError):
        await gate.sign_in(SUPPORT_ADMIN, PASSWORD)

    fake_backend.down = False
    assert await backend_client.get_session() is None
    assert (await gate.check_session()).state == SessionState.UNAUTHENTICATED

@pytest.mark.asyncio
async def test_sign_in_without_admin_role_tears_down_session(gate, backend_client, fake_backend):
    with pytest.raises(AdminAccessDeniedError) as exc_info:
        await gate.sign_in(PLAIN_USER, PASSWORD)

    assert "admin access" in exc_info.value.message
    assert gate.state == SessionState.UNAUTHENTICATED
    assert gate.admin is None
    assert gate.last_error == "not_admin"
    assert await backend_client.get_session() is None
    assert fake_backend.access_tokens == {}


@pytest.mark.asyncio
async def test_sign_in_role_lookup_failure_denies_access(gate, backend_client, fake_backend):
    fake_backend.fail_rpc("get_admin_role", status_code=500, message="database unavailable")

    with pytest.raises(AdminAccessDeniedError):
        await gate.sign_in(SUPER_ADMIN, PASSWORD)

    assert gate.state == SessionState.UNAUTHENTICATED
    assert gate.last_error == "backend_error"
    assert await backend_client.get_session() is None


@pytest.mark.asyncio
async def test_sign_in_unknown_role_is_denied(gate, fake_backend):
    fake_backend.admin_roles[fake_backend.user_id(SUPER_ADMIN)] = "Janitor"

    with pytest.raises(AdminAccessDeniedError):
        await gate.sign_in(SUPER_ADMIN, PASSWORD)

    assert gate.admin is None


@pytest.mark.asyncio
async def test_sign_in_backend_unreachable(gate, fake_backend):
    fake_backend.down = True

    with pytest.raises(SignInError) as exc_info:
        await gate.sign_in(SUPER_ADMIN, PASSWORD)

    assert not isinstance(exc_info.value, InvalidCredentialsError)
    assert gate.state == SessionState.UNAUTHENTICATED
    assert gate.last_error == "backend_error"


# ---------------------------------------------------------------------------
# check_session
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_check_session_without_session(gate):
    snapshot = await gate.check_session()

    assert snapshot.state == SessionState.UNAUTHENTICATED
    assert snapshot.is_loading is False
    assert snapshot.admin is None


@pytest.mark.asyncio
async def test_check_session_restores_existing_admin_session(fake_backend):
    backend = make_backend_client(fake_backend)
    await backend.sign_in_with_password(SUPPORT_ADMIN, PASSWORD)
    gate = SessionGate(backend, SecureAPI(backend))

    snapshot = await gate.check_session()

    assert snapshot.state == SessionState.AUTHENTICATED
    assert snapshot.admin.role == AdminRole.SUPPORT_ADMIN
    assert snapshot.is_loading is False


@pytest.mark.asyncio
async def test_check_session_is_idempotent(gate):
    await gate.sign_in(READ_ONLY, PASSWORD)

    first = await gate.check_session()
    second = await gate.check_session()

    assert first == second
    assert second.admin.role == AdminRole.READ_ONLY


@pytest.mark.asyncio
async def test_check_session_non_admin_signs_out(fake_backend):
    backend = make_backend_client(fake_backend)
    await backend.sign_in_with_password(PLAIN_USER, PASSWORD)
    gate = SessionGate(backend, SecureAPI(backend))

    snapshot = await gate.check_session()

    assert snapshot.state == SessionState.UNAUTHENTICATED
    assert gate.last_error == "not_admin"
    assert await backend.get_session() is None


@pytest.mark.asyncio
async def test_check_session_never_raises(gate, fake_backend):
    await gate.sign_in(SUPER_ADMIN, PASSWORD)
    fake_backend.down = True

    snapshot = await gate.check_session()

    assert snapshot.state == SessionState.UNAUTHENTICATED
    assert snapshot.admin is None
    assert gate.last_error == "backend_error"


@pytest.mark.asyncio
async def test_check_session_with_revoked_role(gate, fake_backend):
    await gate.sign_in(SUPER_ADMIN, PASSWORD)
    del fake_backend.admin_roles[fake_backend.user_id(SUPER_ADMIN)]

    snapshot = await gate.check_session()

    assert snapshot.state == SessionState.UNAUTHENTICATED
    assert gate.can_modify() is False


# ---------------------------------------------------------------------------
# sign_out / auth events
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_sign_out_clears_state(gate, backend_client):
    await gate.sign_in(SUPER_ADMIN, PASSWORD)

    await gate.sign_out()

    assert gate.state == SessionState.UNAUTHENTICATED
    assert gate.admin is None
    assert await backend_client.get_session() is None


@pytest.mark.asyncio
async def test_sign_out_clears_state_even_when_remote_fails(gate, fake_backend):
    await gate.sign_in(SUPER_ADMIN, PASSWORD)
    fake_backend.logout_status = 500

    with pytest.raises(AuthApiError):
        await gate.logout()

    assert gate.state == SessionState.UNAUTHENTICATED
    assert gate.admin is None


@pytest.mark.asyncio
async def test_backend_sign_out_event_clears_gate(gate, backend_client, fake_backend):
    await gate.start()
    await gate.sign_in(SUPER_ADMIN, PASSWORD)
    logout_calls = len([r for r in fake_backend.requests if r.url.path == "/auth/v1/logout"])

    await backend_client.sign_out()

    assert gate.state == SessionState.UNAUTHENTICATED
    after = len([r for r in fake_backend.requests if r.url.path == "/auth/v1/logout"])
    assert after == logout_calls + 1


@pytest.mark.asyncio
async def test_failed_refresh_signs_gate_out(gate, backend_client, fake_backend):
    await gate.start()
    fake_backend.token_ttl = 5
    await gate.sign_in(SUPER_ADMIN, PASSWORD)
    fake_backend.revoke_all_tokens()

    assert await backend_client.get_session() is None
    assert gate.state == SessionState.UNAUTHENTICATED


@pytest.mark.asyncio
async def test_external_sign_in_event_triggers_check(gate, backend_client):
    await gate.start()
    assert gate.state == SessionState.UNAUTHENTICATED

    await backend_client.sign_in_with_password(SUPPORT_ADMIN, PASSWORD)

    assert gate.state == SessionState.AUTHENTICATED
    assert gate.admin.role == AdminRole.SUPPORT_ADMIN


@pytest.mark.asyncio
async def test_own_sign_in_resolves_role_once(gate, fake_backend):
    await gate.start()

    await gate.sign_in(SUPER_ADMIN, PASSWORD)

    assert len(fake_backend.calls_to("get_admin_role")) == 1


@pytest.mark.asyncio
async def test_close_unsubscribes_from_backend(gate, backend_client):
    await gate.start()
    await gate.close()

    await backend_client.sign_in_with_password(SUPER_ADMIN, PASSWORD)

    assert gate.state == SessionState.UNAUTHENTICATED


@pytest.mark.asyncio
async def test_unsubscribed_listener_stops_receiving(gate):
    recorder = SnapshotRecorder()
    unsubscribe = gate.subscribe(recorder)
    unsubscribe()

    await gate.sign_in(SUPER_ADMIN, PASSWORD)

    assert recorder.snapshots == []


# ---------------------------------------------------------------------------
# Capabilities
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
@pytest.mark.parametrize("email, modify, delete, manage", [
    (SUPER_ADMIN, True, True, True),
    (SUPPORT_ADMIN, True, False, False),
    (READ_ONLY, False, False, False),
])
async def test_role_capabilities(gate, email, modify, delete, manage):
    await gate.sign_in(email, PASSWORD)

    assert gate.can_modify() is modify
    assert gate.can_delete() is delete
    assert gate.can_manage_admins() is manage


def test_no_admin_has_no_capabilities(gate):
    assert gate.can_modify() is False
    assert gate.can_delete() is False
    assert gate.can_manage_admins() is False
