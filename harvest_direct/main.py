"""
Harvest Direct API

Cart and inventory core of the Harvest Direct farm-to-table storefront.
Guest shoppers are tracked by the X-Session-Id header; back-office
inventory routes require an admin JWT.
"""

import os
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "config", ".env"))

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.config import settings
from .core.errors import HarvestDirectError
from .core.session import echo_session_header
from .routes import products_router, cart_router, admin_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info(f"{settings.app_name} starting up...")
    logger.info(f"Admin auth: {'enabled' if settings.admin_auth_enabled else 'disabled'}")
    yield
    logger.info(f"{settings.app_name} shutting down...")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Session carts and inventory checks for the Harvest Direct storefront",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware; the session header must be readable by browser clients
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[settings.session_header],
)


@app.exception_handler(HarvestDirectError)
async def harvest_direct_error_handler(request: Request, exc: HarvestDirectError):
    """Map service errors to their HTTP status"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    response = JSONResponse(status_code=exc.status_code, content={"detail": exc.message})
    return echo_session_header(request, response)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Reject malformed input with 400 and a readable message"""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    response = JSONResponse(status_code=400, content={"detail": "; ".join(messages)})
    return echo_session_header(request, response)


# Include API routers
app.include_router(products_router)
app.include_router(cart_router)
app.include_router(admin_router)


@app.get("/")
async def home():
    """API index"""
    return {
        "message": "Harvest Direct API",
        "docs": "/docs",
        "endpoints": {
            "products": f"{settings.api_prefix}/products",
            "cart": f"{settings.api_prefix}/cart",
            "admin": f"{settings.api_prefix}/admin",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "harvest-direct"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "harvest_direct.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
