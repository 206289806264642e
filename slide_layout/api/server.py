"""
FastAPI application exposing the layout engine over HTTP.

Run with: uvicorn slide_layout.api.server:app --port 9090
"""
import os
from datetime import datetime

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from slide_layout import __version__
from slide_layout.api.requests.api_accessibility import router as accessibility_router
from slide_layout.api.requests.api_layout import router as layout_router
from slide_layout.config import apply_logging_config, get_logger

load_dotenv()
apply_logging_config()
logger = get_logger(__name__)

app = FastAPI(title="Slide Layout Engine API", version=__version__)

ENVIRONMENT = (os.getenv("ENVIRONMENT") or os.getenv("ENV") or "development").lower()

allowed_origins = set(filter(None, os.getenv("CORS_ORIGINS", "").split(",")))
if ENVIRONMENT != "production":
    allowed_origins.update({
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    })

app.add_middleware(
    CORSMiddleware,
    allow_origins=sorted(allowed_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(layout_router)
app.include_router(accessibility_router)


@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "version": __version__, "timestamp": datetime.now().isoformat()}


logger.info(f"Slide layout API ready ({ENVIRONMENT})")
