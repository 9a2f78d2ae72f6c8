from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from ecowise.api import health, models, plan, trips
from ecowise.config import get_settings
from ecowise.database import init_db
from ecowise.errors import EcoWiseError
from ecowise.services.ai_service import configure_ai_from_settings

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🌱 Starting EcoWise")

    try:
        init_db()
        logger.info("✅ Database ready")
    except Exception as e:
        logger.error(f"❌ Database init failed: {e}")

    if configure_ai_from_settings(settings):
        logger.info(f"✅ Gemini configured ({settings.gemini_model})")
    else:
        logger.warning("⚠️ GEMINI_API_KEY not set - trip generation will return 500")

    if settings.demo_mode:
        logger.info("Demo mode: serving seeded demo trips")

    yield

    logger.info("🛑 Shutting down EcoWise")


app = FastAPI(
    title="EcoWise",
    description="Eco-friendly travel itinerary planner",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["*"],
)


@app.exception_handler(EcoWiseError)
async def ecowise_error_handler(request: Request, exc: EcoWiseError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=getattr(exc, "headers", None),
    )


app.include_router(plan.router, tags=["plan"])
app.include_router(trips.router, tags=["trips"])
app.include_router(models.router, tags=["models"])
app.include_router(health.router, tags=["health"])


# Health check for monitoring/Docker
@app.get("/ping")
async def ping():
    """Simple ping endpoint for health checks."""
    return {"status": "ok"}


@app.get("/api/config")
async def client_config():
    """Settings the browser client needs."""
    return {"apiBaseUrl": settings.api_base_url.rstrip("/")}
