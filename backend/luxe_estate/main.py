import asyncio
import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from luxe_estate.api.api import api_router
from luxe_estate.bootstrap import bootstrap_admin
from luxe_estate.core.config import get_settings
from luxe_estate.core.database import Base, SessionLocal, engine
from luxe_estate.core.logging import configure_logging
from luxe_estate.core.middleware import RequestIDMiddleware, SecurityHeadersMiddleware
from luxe_estate.core.rate_limit import limiter
from luxe_estate.models import contact, inquiry, notification, property, user  # noqa: F401
from luxe_estate.services.realtime import manager

settings = get_settings()
configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    docs_url="/docs" if settings.ENABLE_API_DOCS else None,
    redoc_url="/redoc" if settings.ENABLE_API_DOCS else None,
    openapi_url="/openapi.json" if settings.ENABLE_API_DOCS else None,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list({settings.CLIENT_URL, *settings.BACKEND_CORS_ORIGINS}),
    # The refresh token travels in an httpOnly cookie.
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "x-request-id"],
)


@app.on_event("startup")
async def on_startup() -> None:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        bootstrap_admin(db)
    finally:
        db.close()
    manager.bind_loop(asyncio.get_running_loop())
    logger.info("%s started (%s)", settings.PROJECT_NAME, settings.ENVIRONMENT)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    manager.bind_loop(None)


@app.get("/health")
@limiter.limit("60/minute")
def health(request: Request):
    return {"status": "ok"}


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


app.include_router(api_router, prefix=settings.API_PREFIX)
