#!/usr/bin/env python3
"""
Drama Tracker - backend entry point
"""

import logging
import sys

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from drama_tracker.core.config import settings
from drama_tracker.core.errors import DramaTrackerError, InvalidInputError
from drama_tracker.api import api_router
from drama_tracker.core.database import init_db

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Track friend-group dramas, vote on severity and crown the monthly drama queen",
    version=settings.VERSION
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,  # frontend dev server
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(DramaTrackerError)
async def drama_tracker_error_handler(request: Request, exc: DramaTrackerError):
    """Render domain errors as {"error": kind, "detail": message}"""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed payloads are invalid input, not 422"""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg", ""))
    error = InvalidInputError("; ".join(messages) or "Invalid request")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())

# API routes
app.include_router(api_router, prefix="/api")

@app.on_event("startup")
async def startup_event():
    """Initialize the database on startup"""
    logger.info("🚀 Starting Drama Tracker backend...")
    await init_db()
    logger.info("✅ Database ready")

@app.get("/")
async def root():
    """Root health check"""
    return {"message": "Drama Tracker backend running", "status": "healthy"}

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "drama-tracker"}

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
