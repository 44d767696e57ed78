import logging
import traceback
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware

from logitrack.core.cache import close_cache_manager, get_cache_manager
from logitrack.core.container_config import get_configured_container
from logitrack.core.exceptions import (
    AuthenticationException,
    AuthorizationException,
    BaseApplicationException,
    ConfirmationRequiredException,
    DocumentUploadException,
    InfrastructureException,
    NotFoundException,
    ValidationException,
)
from logitrack.core.settings import get_app_settings, get_cache_settings
from logitrack.core.static_files import CachedStaticFiles
from logitrack.database import Base, SessionLocal, engine
from logitrack import models  # noqa: F401  registra tutte le tabelle su Base
from logitrack.middleware.request_logging import (
    PerformanceLoggingMiddleware,
    RequestLoggingMiddleware,
    SecurityLoggingMiddleware,
)
from logitrack.routers import auth, carrier, container_type, dashboard, destination, order, order_document, \
    supplier, user
from logitrack.services.auth.session_registry import close_session_registry, init_session_registry
from logitrack.services.interfaces.container_type_service_interface import IContainerTypeService
from logitrack.services.interfaces.user_service_interface import IUserService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

settings = get_app_settings()


async def seed_reference_data() -> None:
    """Tipi di container predefiniti e amministratore iniziale"""
    db = SessionLocal()
    try:
        configured_container = get_configured_container()
        container_type_service = configured_container.resolve_with_session(IContainerTypeService, db)
        await container_type_service.ensure_defaults()

        user_service = configured_container.resolve_with_session(IUserService, db)
        admin = await user_service.ensure_admin(settings.admin_email, settings.admin_password)
        if admin is not None:
            logger.info(f"Amministratore disponibile: {admin.email}")
    finally:
        db.close()


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    Base.metadata.create_all(bind=engine)
    Path(settings.document_storage_root).mkdir(parents=True, exist_ok=True)
    await seed_reference_data()

    cache_manager = await get_cache_manager()
    cache_settings = get_cache_settings()
    logger.info(f"Cache system initialized: {cache_settings.cache_backend} backend, "
                f"enabled: {cache_manager.enabled}")

    init_session_registry()
    logger.info("Session registry initialized")

    yield

    await close_session_registry()
    await close_cache_manager()
    logger.info("Session registry and cache closed")


app = FastAPI(
    title=settings.app_name,
    lifespan=lifespan
)

# Inizializza il container DI
get_configured_container()

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add logging middleware
app.add_middleware(RequestLoggingMiddleware, log_requests=True, log_responses=False)
app.add_middleware(PerformanceLoggingMiddleware, slow_request_threshold=1.0)
app.add_middleware(SecurityLoggingMiddleware)


# ============================================================================
# GLOBAL EXCEPTION HANDLERS
# ============================================================================

def _error_response(exc: BaseApplicationException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


@app.exception_handler(BaseApplicationException)
async def custom_application_exception_handler(request: Request, exc: BaseApplicationException):
    """Handler per eccezioni custom dell'applicazione"""
    logger.warning(f"Application exception: {exc.error_code} - {exc.message}", extra={
        "error_code": exc.error_code,
        "details": exc.details,
        "path": str(request.url),
        "method": request.method
    })
    return _error_response(exc)


@app.exception_handler(ValidationException)
async def validation_exception_handler(request: Request, exc: ValidationException):
    """Handler specifico per errori di validazione"""
    logger.warning(f"Validation error: {exc.message}", extra={
        "error_code": exc.error_code,
        "details": exc.details,
        "path": str(request.url)
    })
    return _error_response(exc)


@app.exception_handler(NotFoundException)
async def not_found_exception_handler(request: Request, exc: NotFoundException):
    """Handler specifico per entità non trovate"""
    logger.info(f"Entity not found: {exc.message}", extra={
        "error_code": exc.error_code,
        "details": exc.details,
        "path": str(request.url)
    })
    return _error_response(exc)


@app.exception_handler(ConfirmationRequiredException)
async def confirmation_required_exception_handler(request: Request, exc: ConfirmationRequiredException):
    """Eliminazione richiesta senza conferma: i details riportano i dati da mostrare all'operatore"""
    logger.info(f"Confirmation required: {exc.message}", extra={
        "details": exc.details,
        "path": str(request.url)
    })
    return _error_response(exc)


@app.exception_handler(AuthenticationException)
async def authentication_exception_handler(request: Request, exc: AuthenticationException):
    """Handler specifico per errori di autenticazione"""
    logger.warning(f"Authentication error: {exc.message}", extra={
        "error_code": exc.error_code,
        "path": str(request.url)
    })
    response = _error_response(exc)
    response.headers["WWW-Authenticate"] = "Bearer"
    return response


@app.exception_handler(AuthorizationException)
async def authorization_exception_handler(request: Request, exc: AuthorizationException):
    """Handler specifico per errori di autorizzazione"""
    logger.warning(f"Authorization error: {exc.message}", extra={
        "error_code": exc.error_code,
        "details": exc.details,
        "path": str(request.url)
    })
    return _error_response(exc)


@app.exception_handler(DocumentUploadException)
async def document_upload_exception_handler(request: Request, exc: DocumentUploadException):
    """L'ordine è salvato, il documento no: il client può ripetere il caricamento"""
    logger.error(f"Document upload failed: {exc.message}", extra={
        "error_code": exc.error_code,
        "details": exc.details,
        "path": str(request.url)
    })
    return _error_response(exc)


@app.exception_handler(InfrastructureException)
async def infrastructure_exception_handler(request: Request, exc: InfrastructureException):
    """Handler specifico per errori di infrastruttura"""
    logger.error(f"Infrastructure error: {exc.message}", extra={
        "error_code": exc.error_code,
        "details": exc.details,
        "path": str(request.url)
    })
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Handler per errori di validazione FastAPI"""
    errors = jsonable_encoder(exc.errors())
    logger.warning(f"Request validation error: {errors}", extra={
        "path": str(request.url),
        "method": request.method
    })

    return JSONResponse(
        status_code=422,
        content={
            "error_code": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": {"errors": errors},
            "status_code": 422
        }
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handler per HTTPException di Starlette"""
    logger.info(f"HTTP exception: {exc.status_code} - {exc.detail}", extra={
        "status_code": exc.status_code,
        "path": str(request.url)
    })

    error_code = "UNAUTHORIZED" if exc.status_code == 401 else "HTTP_ERROR"
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": error_code,
            "message": str(exc.detail),
            "details": {},
            "status_code": exc.status_code
        },
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handler generico per errori non gestiti"""
    logger.error(f"Unhandled exception: {str(exc)}", extra={
        "path": str(request.url),
        "method": request.method,
        "traceback": traceback.format_exc()
    })

    return JSONResponse(
        status_code=500,
        content={
            "error_code": "INTERNAL_SERVER_ERROR",
            "message": "Internal server error",
            "details": {},
            "status_code": 500
        }
    )


app.include_router(auth.router)
app.include_router(user.router)
app.include_router(dashboard.router)
app.include_router(order.router)
app.include_router(order_document.router)
app.include_router(supplier.router)
app.include_router(carrier.router)
app.include_router(destination.router)
app.include_router(container_type.router)

# Documenti serviti localmente solo se l'URL pubblico è un path dell'applicazione
if settings.document_public_base_url.startswith("/"):
    app.mount(
        settings.document_public_base_url,
        CachedStaticFiles(directory=settings.document_storage_root, check_dir=False),
        name="documents"
    )


@app.get("/health")
async def health():
    return {"status": "healthy", "app": settings.app_name}


@app.get("/health/cache")
async def cache_health():
    """Cache health check endpoint"""
    try:
        cache_manager = await get_cache_manager()
        stats = await cache_manager.get_stats()
    except Exception as e:
        logger.error(f"Cache health check failed: {e}")
        raise HTTPException(status_code=503, detail="Cache unhealthy")
    return {
        "status": "healthy",
        "cache_enabled": stats.get("enabled", False),
        "backend": stats.get("backend", "unknown"),
        "memory_cache": stats.get("memory", {}),
        "redis_cache": stats.get("redis", {}),
        "circuit_breaker": stats.get("circuit_breaker", {})
    }
