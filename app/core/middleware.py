from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
import time
import logging

from app.config.settings import settings
from app.core.auth.dependencies import LoginRequiredError
from app.shared.schemas.common import ErrorResponse
from app.shared.services.backend_client import BackendError
from app.shared.services.secure_api import NotAuthenticatedError

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"


def _redirect_to_login() -> RedirectResponse:
    return RedirectResponse(url=LOGIN_PATH, status_code=303)


def setup_middleware(app: FastAPI):
    """Configure all middleware for the application"""

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request, call_next):
        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )

        return response


def setup_exception_handlers(app: FastAPI):
    """Traducir errores de sesión y del backend a respuestas HTTP"""

    @app.exception_handler(LoginRequiredError)
    async def login_required_handler(request: Request, exc: LoginRequiredError):
        logger.info(f"Unauthenticated access to {request.url.path}, redirecting to login")
        return _redirect_to_login()

    @app.exception_handler(NotAuthenticatedError)
    async def not_authenticated_handler(request: Request, exc: NotAuthenticatedError):
        logger.warning(f"Backend session missing during {request.url.path}")
        await request.app.state.session_gate.check_session()
        return _redirect_to_login()

    @app.exception_handler(BackendError)
    async def backend_error_handler(request: Request, exc: BackendError):
        if exc.status_code == 401:
            logger.warning(f"Backend session expired during {request.url.path}")
            await request.app.state.session_gate.check_session()
            return _redirect_to_login()

        status_code = exc.status_code if exc.status_code and 400 <= exc.status_code < 500 else 502
        body = ErrorResponse(
            message=exc.message,
            error_code=exc.code,
            details=exc.details,
            hint=exc.hint,
        )
        return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))
