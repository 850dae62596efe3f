# app/shared/services/secure_api.py
"""
Gateway hacia el backend.

Todas las operaciones privilegiadas pasan por procedimientos remotos
(SECURITY DEFINER) o por tablas protegidas con RLS; aquí solo se arma la
llamada, se registra y se propaga el error tal cual.
"""
import logging
from typing import Any, Dict, List, Optional

from .backend_client import BackendClient, BackendError

logger = logging.getLogger(__name__)


class NotAuthenticatedError(Exception):
    """No hay usuario autenticado en el backend"""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)
        self.message = message


class SecureAPI:
    """Un método por operación del backend"""

    def __init__(self, backend: BackendClient):
        self.backend = backend

    # =====================================================
    # HELPERS
    # =====================================================

    async def _require_user(self) -> Dict[str, Any]:
        user = await self.backend.get_user()
        if not user:
            raise NotAuthenticatedError()
        return user

    async def _call(self, function: str, params: Optional[Dict[str, Any]] = None) -> Any:
        logger.info(f"[RPC] Calling {function}...")
        try:
            data = await self.backend.rpc(function, params)
        except BackendError as e:
            logger.error(
                f"[RPC ERROR] {function} failed: message={e.message} "
                f"code={e.code} details={e.details} hint={e.hint}"
            )
            raise
        if isinstance(data, list):
            logger.info(f"[RPC] {function} returned {len(data)} records")
        return data

    async def _admin_call(self, function: str, params: Dict[str, Any]) -> Any:
        """RPC mutante: resuelve al admin y lo envía como admin_id"""
        user = await self._require_user()
        return await self._call(function, {**params, "admin_id": user["id"]})

    async def _select(self, table: str, **kwargs) -> Any:
        try:
            return await self.backend.select(table, **kwargs)
        except BackendError as e:
            logger.error(f"[TABLE ERROR] select {table} failed: {e.message} ({e.code})")
            raise

    # =====================================================
    # AUTH & ADMIN
    # =====================================================

    async def get_current_admin(self) -> Optional[Dict[str, Any]]:
        """Usuario actual con su rol de admin, o None si no es admin activo"""
        user = await self.backend.get_user()
        if not user:
            logger.info("[Admin] No authenticated user")
            return None

        logger.info(f"[Admin] Checking admin role for user: {user['id']}")
        admin_role = await self._call("get_admin_role", {"user_uuid": user["id"]})

        if not admin_role:
            logger.warning(f"[Admin] No admin role found for user: {user['id']}")
            return None

        # get_admin_role solo devuelve roles activos
        return {**user, "admin_role": admin_role, "is_active": True}

    # =====================================================
    # SUBSCRIPTIONS & TRIALS
    # =====================================================

    async def get_users_with_subscriptions(self) -> List[Dict[str, Any]]:
        return await self._call("get_users_with_subscriptions") or []

    async def get_subscriptions(self) -> List[Dict[str, Any]]:
        return await self._select("subscriptions")

    async def extend_trial_secure(self, user_id: str, days: int, justification: str) -> Any:
        return await self._admin_call("extend_trial_secure", {
            "target_user_id": user_id,
            "days_to_add": days,
            "justification": justification,
        })

    async def upgrade_plan_secure(
        self,
        user_id: str,
        new_plan_id: str,
        justification: str = "Admin upgrade",
    ) -> Any:
        return await self._admin_call("upgrade_plan_secure", {
            "target_user_id": user_id,
            "new_plan_id": new_plan_id,
            "justification": justification,
        })

    async def admin_set_user_status_secure(
        self,
        user_id: str,
        new_status: str,
        justification: str,
    ) -> Any:
        return await self._admin_call("admin_set_user_status_secure", {
            "target_user_id": user_id,
            "new_status": new_status,
            "justification": justification,
        })

    # =====================================================
    # DEVICES
    # =====================================================

    async def get_active_devices(self) -> List[Dict[str, Any]]:
        return await self._call("get_active_devices") or []

    async def get_devices(self) -> List[Dict[str, Any]]:
        return await self._select("devices", order="last_seen.desc")

    async def block_device_secure(self, device_hash: str, justification: str) -> Any:
        return await self._admin_call("block_device_secure", {
            "target_device_hash": device_hash,
            "justification": justification,
        })

    async def unblock_device_secure(self, device_hash: str, justification: str) -> Any:
        return await self._admin_call("unblock_device_secure", {
            "target_device_hash": device_hash,
            "justification": justification,
        })

    async def reset_device_trial_count(self, device_hash: str, justification: str) -> Any:
        return await self._admin_call("reset_device_trial_secure", {
            "target_device_hash": device_hash,
            "justification": justification,
        })

    # =====================================================
    # PLANS
    # =====================================================

    async def get_plans(self) -> List[Dict[str, Any]]:
        return await self._select("plans")

    async def get_plan_analytics(self) -> Any:
        return await self._call("get_plan_analytics")

    async def get_plan_by_id(self, plan_id: str) -> Dict[str, Any]:
        return await self._select("plans", filters={"id": plan_id}, single=True)

    # =====================================================
    # AUDIT LOGS
    # =====================================================

    async def get_audit_logs_secure(self, limit: int = 100) -> List[Dict[str, Any]]:
        return await self._call("get_audit_logs_secure", {"p_limit": limit}) or []

    # =====================================================
    # EMAIL POOL
    # =====================================================

    async def get_sender_pool(self) -> List[Dict[str, Any]]:
        return await self._select(
            "sender_pool",
            columns="id,smtp_email,smtp_server,smtp_port,assigned_count,is_active,created_at",
            order="created_at.desc",
        )

    async def get_sender_assignments(self) -> List[Dict[str, Any]]:
        return await self._select(
            "sender_assignments",
            columns="id,user_id,sender_id,sender_pool(id,smtp_email)",
        )

    async def add_sender_secure(self, email: str, server: str, port: int, password: str) -> Any:
        return await self._admin_call("add_sender_secure", {
            "smtp_email_addr": email,
            "smtp_server": server,
            "smtp_port_num": port,
            "smtp_password_val": password,
        })

    async def assign_sender_secure(self, user_id: str) -> Any:
        return await self._admin_call("assign_sender_secure", {"target_user_id": user_id})

    async def toggle_sender_status_secure(self, sender_id: str, is_active: bool) -> Any:
        return await self._admin_call("toggle_sender_status", {
            "sender_id": sender_id,
            "is_active_val": is_active,
        })

    async def update_sender_assignment_secure(self, user_id: str, new_sender_id: str) -> Any:
        return await self._admin_call("update_sender_assignment_secure", {
            "target_user_id": user_id,
            "new_sender_id": new_sender_id,
        })

    # =====================================================
    # PROMOTIONS
    # =====================================================

    async def get_promotions(self) -> List[Dict[str, Any]]:
        return await self._select(
            "promotions",
            columns="id,code,discount_percent,max_uses,uses,is_active,created_at",
            order="created_at.desc",
        )

    async def create_promotion(self, code: str, discount_percent: int, max_uses: int) -> Dict[str, Any]:
        await self._require_user()
        rows = await self.backend.insert("promotions", {
            "code": code.upper(),
            "discount_percent": discount_percent,
            "max_uses": max_uses,
            "uses": 0,
            "is_active": True,
        })
        return rows[0] if rows else {}

    async def set_promotion_active(self, promotion_id: str, is_active: bool) -> Dict[str, Any]:
        await self._require_user()
        rows = await self.backend.update(
            "promotions", {"is_active": is_active}, {"id": promotion_id}
        )
        return rows[0] if rows else {}

    async def delete_promotion(self, promotion_id: str) -> Dict[str, Any]:
        await self._require_user()
        rows = await self.backend.delete("promotions", {"id": promotion_id})
        return rows[0] if rows else {}

    async def apply_promotion_secure(self, user_id: str, promo_code: str) -> Any:
        return await self._admin_call("apply_promotion_secure", {
            "target_user_id": user_id,
            "promo_code": promo_code,
        })

    # =====================================================
    # SECURITY / BLOCKED IPS
    # =====================================================

    async def get_blocked_ips(self) -> List[Dict[str, Any]]:
        return await self._select(
            "blocked_ips",
            columns="id,ip_address,reason,created_at",
            order="created_at.desc",
        )

    async def add_blocked_ip_secure(self, ip_address: str, reason: str) -> Any:
        return await self._admin_call("add_blocked_ip_secure", {
            "ip_addr": ip_address,
            "reason_text": reason,
        })

    async def remove_blocked_ip_secure(self, blocked_ip_id: str) -> Any:
        return await self._admin_call("remove_blocked_ip_secure", {"blocked_ip_id": blocked_ip_id})

    # =====================================================
    # ADMIN ROLES
    # =====================================================

    async def create_admin_role(self, user_id: str, role: str) -> Dict[str, Any]:
        await self._require_user()
        rows = await self.backend.insert("admin_roles", {
            "user_id": user_id,
            "role": role,
            "is_active": True,
        })
        return rows[0] if rows else {}

    async def get_admin_roles(self) -> List[Dict[str, Any]]:
        return await self._select("admin_roles", filters={"is_active": True})

    async def update_admin_role(self, user_id: str, role: str) -> Dict[str, Any]:
        await self._require_user()
        rows = await self.backend.update("admin_roles", {"role": role}, {"user_id": user_id})
        return rows[0] if rows else {}

    async def deactivate_admin_role(self, user_id: str) -> Dict[str, Any]:
        await self._require_user()
        rows = await self.backend.update("admin_roles", {"is_active": False}, {"user_id": user_id})
        return rows[0] if rows else {}

    # =====================================================
    # APP CONFIG
    # =====================================================

    async def get_app_config(self, keys: List[str]) -> List[Dict[str, Any]]:
        return await self._select(
            "app_config",
            columns="key,value,description,updated_at,updated_by",
            filters={"key": keys},
        )

    async def update_app_config(self, key: str, value: str, updated_by: Optional[str]) -> Any:
        await self._require_user()
        if not updated_by:
            raise ValueError("Admin ID is required")
        return await self._call("update_app_config_secure", {
            "config_key": key,
            "config_value": value,
            "admin_id": updated_by,
        })

    # =====================================================
    # LOGIN MONITORING
    # =====================================================

    async def get_suspicious_logins(self, min_attempts: int = 5) -> List[Dict[str, Any]]:
        return await self._call("get_suspicious_logins", {"min_failed_attempts": min_attempts}) or []

    async def get_login_history(self, email: str) -> List[Dict[str, Any]]:
        return await self._call("get_login_history_secure", {"target_email": email}) or []

    async def get_multi_device_logins(self, min_devices: int = 2) -> List[Dict[str, Any]]:
        return await self._call("get_multi_device_logins", {"min_device_count": min_devices}) or []

    async def get_user_sessions(self, user_id: str) -> List[Dict[str, Any]]:
        return await self._call("get_user_sessions", {"target_user_id": user_id}) or []

    async def terminate_user_session(self, user_id: str, device_hash: str) -> Any:
        return await self._admin_call("terminate_user_session", {
            "target_user_id": user_id,
            "target_device_hash": device_hash,
        })

    # =====================================================
    # EMERGENCY ALERTS
    # =====================================================

    async def get_emergency_alerts(self) -> List[Dict[str, Any]]:
        return await self._select("emergency_alerts", order="triggered_at.desc")

    async def set_emergency_alert_status(self, alert_id: str, status: str) -> Dict[str, Any]:
        await self._require_user()
        rows = await self.backend.update("emergency_alerts", {"status": status}, {"id": alert_id})
        return rows[0] if rows else {}
