from fastapi import APIRouter
from fastapi.responses import JSONResponse
import logging

from ecowise.errors import UpstreamCallError
from ecowise.schemas.plan import ModelsResponse
from ecowise.services.ai_service import AIService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/models", response_model=ModelsResponse)
async def list_models():
    """Proxy the list of Gemini models available to the configured key."""
    if not AIService.is_configured():
        return JSONResponse(status_code=500, content={"error": "GEMINI_API_KEY is not configured"})

    try:
        models = await AIService.list_models()
    except UpstreamCallError as e:
        logger.error(f"Failed to list models: {e.message}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to list models", "message": e.message},
        )

    return ModelsResponse(models=models)
