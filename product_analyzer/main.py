"""
Product Performance Analyzer
Main FastAPI application
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.middleware.gzip import GZipMiddleware
from contextlib import asynccontextmanager

from product_analyzer.config import get_settings
from product_analyzer.utils.logger import log
from product_analyzer import __version__
from product_analyzer.api import analysis, health

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    log.info(f"Starting {settings.app_name} v{__version__}")
    log.info(f"Environment: {settings.environment}")
    yield
    log.info("Shutting down application")


app = FastAPI(
    title=settings.app_name,
    version=__version__,
    description="""
    Product performance segmentation for Google Ads shopping exports

    Upload a product-level export to:
    - Segment products into top performers, low performers, zero revenue,
      impression-only and uncategorized groups against a ROAS threshold
    - Roll up cost, revenue and ROAS per brand and per device
    - Find efficient products with low search impression share (potential)
    - Find inefficient products with high search impression share (overspending)
    - Generate slide-ready summary text in Czech, Slovak or English
    """,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Gzip compression for large reports
app.add_middleware(GZipMiddleware, minimum_size=500)

# Include routers
app.include_router(health.router, tags=["health"])
app.include_router(analysis.router)


@app.get("/robots.txt", response_class=PlainTextResponse)
async def robots_txt():
    """Block all crawlers"""
    return "User-agent: *\nDisallow: /\n"


@app.get("/")
async def root():
    """Root endpoint with API information"""
    return {
        "app": settings.app_name,
        "version": __version__,
        "description": "Product performance segmentation",
        "docs": "/docs",
        "health": "/health",
        "status": "/status",
        "endpoints": {
            "analysis_upload": "POST /analysis/upload",
            "analysis_export": "POST /analysis/export/{potential|overspending}",
            "analysis_summary_text": "POST /analysis/summary-text"
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "product_analyzer.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
