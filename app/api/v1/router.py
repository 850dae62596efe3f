# app/api/v1/router.py
from fastapi import APIRouter
from app.api.v1.auth import router as auth_router
from app.api.v1.navigation import router as navigation_router
from app.modules.overview import router as overview_router
from app.modules.users import router as users_router
from app.modules.subscriptions import router as subscriptions_router
from app.modules.devices import router as devices_router
from app.modules.email_pool import router as email_pool_router
from app.modules.promotions import router as promotions_router
from app.modules.plans import router as plans_router
from app.modules.security import router as security_router
from app.modules.login_monitoring import router as login_monitoring_router
from app.modules.analytics import router as analytics_router
from app.modules.audit import router as audit_router
from app.modules.emergency_alerts import router as emergency_alerts_router
from app.modules.trial_settings import router as trial_settings_router
from app.modules.admins import router as admins_router


# Crear router principal de la API v1
api_router = APIRouter()

# ==================== AUTENTICACIÓN ====================

api_router.include_router(auth_router, prefix="/auth", tags=["authentication"])
api_router.include_router(navigation_router, tags=["Navigation"])

# ==================== PÁGINAS DE LA CONSOLA ====================

api_router.include_router(
    overview_router,
    prefix="/overview",
    tags=["Overview"]
)

api_router.include_router(
    users_router,
    prefix="/users",
    tags=["Users"]
)

api_router.include_router(
    subscriptions_router,
    prefix="/subscriptions",
    tags=["Subscriptions"]
)

api_router.include_router(
    devices_router,
    prefix="/devices",
    tags=["Devices"]
)

api_router.include_router(
    email_pool_router,
    prefix="/email-pool",
    tags=["Email Pool"]
)

api_router.include_router(
    promotions_router,
    prefix="/promotions",
    tags=["Promotions"]
)

api_router.include_router(
    plans_router,
    prefix="/plans",
    tags=["Plans"]
)

api_router.include_router(
    security_router,
    prefix="/security",
    tags=["Security"]
)

api_router.include_router(
    login_monitoring_router,
    prefix="/login-monitoring",
    tags=["Login Monitoring"]
)

api_router.include_router(
    analytics_router,
    prefix="/analytics",
    tags=["Analytics"]
)

api_router.include_router(
    audit_router,
    prefix="/audit",
    tags=["Audit Log"]
)

api_router.include_router(
    emergency_alerts_router,
    prefix="/emergency-alerts",
    tags=["Emergency Alerts"]
)

api_router.include_router(
    trial_settings_router,
    prefix="/trial-settings",
    tags=["Trial Settings"]
)

api_router.include_router(
    admins_router,
    prefix="/admins",
    tags=["Admins"]
)

# ==================== ENDPOINTS RAÍZ ====================

@api_router.get("/")
async def api_root():
    """Root endpoint de la API"""
    return {
        "message": "eMonitor Admin API v1",
        "status": "active",
        "docs": "/docs",
        "login": "/api/v1/auth/login",
        "navigation": "/api/v1/navigation"
    }
