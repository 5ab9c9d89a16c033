"""FastAPI application entrypoint. No business logic; only wiring, middleware and exception handlers."""

import logging

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from app.api.v1 import router as v1_router
from app.api.v1.auth import INVALID_CREDENTIALS
from app.core.config import settings
from app.services.access import LoginRequired, login_redirect_url

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Beatstore API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.exception_handler(LoginRequired)
def redirect_to_login(request: Request, exc: LoginRequired) -> RedirectResponse:
    """Page guards without a session: send the client to the login page with ?next=."""
    logger.debug("Login required for %s", request.url.path)
    return RedirectResponse(
        url=login_redirect_url(exc.next_path),
        status_code=status.HTTP_307_TEMPORARY_REDIRECT,
    )


@app.exception_handler(RequestValidationError)
async def login_validation_as_unauthorized(request: Request, exc: RequestValidationError):
    """
    Malformed login bodies get the same 401 as a wrong password and never echo the input.
    Every other route keeps FastAPI's 422.
    """
    if request.url.path == f"{settings.API_V1_PREFIX}/auth/login":
        logger.info("Login rejected: malformed request body")
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": INVALID_CREDENTIALS},
            headers={"WWW-Authenticate": "Bearer"},
        )
    return await request_validation_exception_handler(request, exc)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Beatstore API"}
