# app/api/v1/navigation.py
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from typing import List, Optional

from app.core.auth.dependencies import get_current_admin, get_session_gate
from app.core.auth.service import AdminIdentity, Capability, SessionGate

router = APIRouter()


class NavigationItem(BaseModel):
    name: str
    href: str
    requires: Optional[Capability] = None


# Orden del menú lateral de la consola
NAVIGATION: List[NavigationItem] = [
    NavigationItem(name="Overview", href="/api/v1/overview"),
    NavigationItem(name="Users", href="/api/v1/users"),
    NavigationItem(name="Subscriptions", href="/api/v1/subscriptions"),
    NavigationItem(name="Devices", href="/api/v1/devices"),
    NavigationItem(name="Email Pool", href="/api/v1/email-pool"),
    NavigationItem(name="Promotions", href="/api/v1/promotions"),
    NavigationItem(name="Plans", href="/api/v1/plans"),
    NavigationItem(name="Security", href="/api/v1/security/blocked-ips"),
    NavigationItem(name="Suspicious Logins", href="/api/v1/login-monitoring/suspicious"),
    NavigationItem(name="Multi-Device Logins", href="/api/v1/login-monitoring/multi-device"),
    NavigationItem(name="Analytics", href="/api/v1/analytics"),
    NavigationItem(name="Audit Log", href="/api/v1/audit"),
    NavigationItem(name="Emergency Alerts", href="/api/v1/emergency-alerts"),
    NavigationItem(name="Trial Settings", href="/api/v1/trial-settings"),
    NavigationItem(name="Admins", href="/api/v1/admins", requires=Capability.MANAGE_ADMINS),
]


def build_navigation(gate: SessionGate) -> List[NavigationItem]:
    """Entradas visibles para el rol del admin actual"""
    return [
        item for item in NAVIGATION
        if item.requires is None or gate.has_capability(item.requires)
    ]


@router.get("/navigation", response_model=List[NavigationItem])
async def get_navigation(
    current_admin: AdminIdentity = Depends(get_current_admin),
    gate: SessionGate = Depends(get_session_gate)
):
    """Menú de navegación filtrado por capacidades"""
    return build_navigation(gate)
