import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Import models so every table is registered on Base before create_all
from . import models  # noqa: F401
from .config import ALLOWED_ORIGINS
from .database import Base, engine
from .domain.activity.router import router as activity_router
from .domain.analytics.router import router as analytics_router
from .domain.availability.router import router as availability_router
from .domain.bookings.router import router as bookings_router
from .domain.chat.router import router as chat_router
from .domain.catalog.router import router as catalog_router
from .domain.live.router import router as live_router
from .domain.notifications.router import router as notifications_router
from .domain.reviews.router import router as reviews_router
from .domain.tasks.router import router as tasks_router
from .domain.users.router import auth_router
from .domain.users.router import router as users_router
from .domain.wishlists.router import router as wishlists_router
from .rate_limiter import get_redis_client
from .realtime import manager

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.info("Database tables created successfully")

    try:
        get_redis_client()  # Connection test
        logger.info("Redis connection established")
    except Exception as e:
        logger.warning(f"Redis unavailable - rating cache disabled, rate limits counted in memory: {e}")

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="EventFlow API", version="1.0.0", lifespan=lifespan)


def jsonable_errors(exc: RequestValidationError) -> list:
    # ctx may hold the raw ValueError raised by a field validator
    return [{k: v for k, v in error.items() if k != "ctx"} for error in exc.errors()]


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Convert 422 validation errors from HTTPBearer to 401 authentication errors
    when the issue is with the Authorization header
    """
    for error in exc.errors():
        if error.get("loc") and "authorization" in str(error.get("loc")).lower():
            logger.warning(
                f"Authentication failed for {request.url.path}: Missing or invalid Authorization header"
            )
            return JSONResponse(
                status_code=401,
                content={
                    "detail": "Not authenticated. Please provide a valid Bearer token in the Authorization header."
                },
            )

    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content={"detail": jsonable_errors(exc)})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise


logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Routes
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(catalog_router)
app.include_router(bookings_router)
app.include_router(tasks_router)
app.include_router(chat_router)
app.include_router(availability_router)
app.include_router(reviews_router)
app.include_router(notifications_router)
app.include_router(activity_router)
app.include_router(wishlists_router)
app.include_router(analytics_router)
app.include_router(live_router)


@app.get("/")
async def root():
    return {"message": "EventFlow API", "version": "1.0.0"}


@app.get("/health")
async def health():
    """Database is required; Redis is optional"""
    redis_status = {"connected": False}
    try:
        client = get_redis_client()
        start_time = time.time()
        client.ping()
        redis_status = {"connected": True, "response_time_ms": round((time.time() - start_time) * 1000, 2)}
    except Exception as e:
        redis_status["error"] = str(e)
    return {"status": "healthy", "redis": redis_status, "live_connections": manager.connection_count()}
