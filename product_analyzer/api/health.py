"""
Health check and status endpoints
"""
from fastapi import APIRouter
from datetime import datetime
from product_analyzer.config import get_settings
from product_analyzer import __version__

settings = get_settings()

router = APIRouter()


@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "version": __version__
    }


@router.get("/status")
async def get_status():
    """Get system status"""
    return {
        "app_name": settings.app_name,
        "version": __version__,
        "environment": settings.environment,
        "analysis": {
            "header_search_rows": settings.header_search_rows,
            "default_target_roas_pct": settings.default_target_roas_pct,
            "default_currency": settings.default_currency,
            "report_period_days": settings.report_period_days,
        },
        "timestamp": datetime.utcnow().isoformat()
    }
