import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from pathlib import Path

from app.config import settings
from app.core import setup_logging
from app.database import Database
from app.services.auth.admin_service import AdminService
from app.routes.admin.admin_routes import router as admin_router
from app.routes.contest.participant_routes import router as participant_router
from app.routes.contest.photo_routes import router as photo_router
from app.routes.contest.winner_routes import router as winner_router
from app.utils.exceptions import ContestError
from app.utils.response import contest_error_response, error_response, validation_error_response

setup_logging()
logger = logging.getLogger(__name__)

# Create uploads directory if it doesn't exist
uploads_path = Path(settings.upload_dir)
(uploads_path / "temp").mkdir(parents=True, exist_ok=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for the application"""
    # Startup
    await Database.connect_db()
    try:
        await AdminService(Database.get_db()).seed_super_admin()
    except Exception as e:
        logger.error(f"[ERROR] Error managing admin users: {e}", exc_info=e)

    logger.info(f"[OK] {settings.app_name} ready (storage: {settings.storage_backend})")
    yield
    # Shutdown
    await Database.close_db()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Photo contest API: participants, photos, likes, winners and prize claims",
    lifespan=lifespan
)

# CORS middleware
# In development, allow all origins for easier testing
cors_origins = [
    settings.frontend_url,
    "http://localhost:3000",
    "http://localhost:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins if not settings.debug else ["*"],
    allow_credentials=not settings.debug,  # Can't use credentials with wildcard origin
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ContestError)
async def contest_error_handler(request: Request, exc: ContestError):
    """Errors raised from dependencies (auth, role checks)"""
    return contest_error_response(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = {
        ".".join(str(part) for part in error["loc"] if part != "body"): error["msg"]
        for error in exc.errors()
    }
    return validation_error_response(message="Invalid request", errors=errors)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"[ERROR] Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return error_response(message="Something went wrong!", status_code=500)


# Include routers with /api prefix
app.include_router(participant_router, prefix="/api")
app.include_router(admin_router, prefix="/api")
app.include_router(photo_router, prefix="/api")
app.include_router(winner_router, prefix="/api")

# Mount uploads directory for static file serving (local storage backend)
if settings.storage_backend == "local":
    app.mount("/uploads", StaticFiles(directory=str(uploads_path)), name="uploads")


@app.get("/")
async def read_root():
    """Root endpoint"""
    return {
        "message": f"Welcome to {settings.app_name} API",
        "version": settings.app_version,
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}
