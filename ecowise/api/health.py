from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text
from ecowise.config import get_settings
from ecowise.database import get_db
from ecowise.services.ai_service import AIService

router = APIRouter()


@router.get("/health")
async def health_check(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except Exception as e:
        db_status = f"unhealthy: {str(e)}"

    return {
        "status": "ok" if db_status == "healthy" else "degraded",
        "database": db_status,
        "ai_configured": AIService.is_configured(),
        "ai_model": AIService.get_model(),
        "data_source": "demo" if get_settings().demo_mode else "live",
    }
