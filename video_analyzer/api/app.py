"""
FastAPI application for the YouTube Video Analyzer.
"""

import time
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from video_analyzer.config import config
from video_analyzer.api.routes import router
from video_analyzer.utils.error_handling import GENERIC_ERROR_MESSAGE
from video_analyzer.utils.logger import logging

# FastAPI application
app = FastAPI(
    title=config.APP_NAME,
    version=config.APP_VERSION,
    description="An API that summarizes YouTube videos from their captions",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Middleware to add processing time header to responses."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render framework HTTP errors (404 route, 405 method) as ``{"error": ...}``."""
    message = "Method not allowed" if exc.status_code == 405 else str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"error": message}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Unreadable or mistyped request bodies are client errors."""
    logging.warning(f"Rejected request body on {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled exceptions."""
    logging.error(f"Unhandled error on {request.url.path}: {str(exc)}")
    return JSONResponse(status_code=500, content={"error": GENERIC_ERROR_MESSAGE})


# Include API router
app.include_router(router)


# Root
@app.get("/")
async def root():
    """Root endpoint returning basic API information."""
    return {
        "name": config.APP_NAME,
        "version": config.APP_VERSION,
        "description": "YouTube Video Analyzer API",
    }
