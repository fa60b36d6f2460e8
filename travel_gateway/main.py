"""
Travel API Gateway - FastAPI Application
Free-text travel requests -> LLM extraction -> travel API searches.

Outbound services:
- Mistral chat completions (OpenAI-compatible) for extraction
- Amadeus for flights, hotels, activities and locations
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from openai import OpenAI

from .api import auth_router, travel_router
from .config import settings
from .interfaces import UserStore
from .llm import ExtractionClient
from .schemas import HealthResponse
from .travel import CredentialManager, SearchClient

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# ============================================
# Lifespan
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    logger.info("=" * 50)
    logger.info("Starting Travel API Gateway")
    logger.info("=" * 50)

    missing = settings.missing_secrets()
    if missing:
        logger.warning(f"✗ Missing secrets: {', '.join(missing)}")

    travel_http = httpx.Client(
        base_url=settings.AMADEUS_BASE_URL,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
    )
    credentials = CredentialManager(
        travel_http,
        client_id=settings.AMADEUS_CLIENT_ID,
        client_secret=settings.AMADEUS_CLIENT_SECRET,
        token_path=settings.AMADEUS_TOKEN_PATH,
        expiry_margin_seconds=settings.TOKEN_EXPIRY_MARGIN_SECONDS,
    )
    app.state.search_client = SearchClient(travel_http, credentials)
    logger.info(f"✓ Travel API: {settings.AMADEUS_BASE_URL}")

    llm_client = OpenAI(
        api_key=settings.MISTRAL_API_KEY,
        base_url=settings.MISTRAL_BASE_URL,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
        max_retries=0,
    )
    app.state.extraction_client = ExtractionClient(llm_client, model=settings.MISTRAL_MODEL)
    logger.info(f"✓ LLM Provider: Mistral ({settings.MISTRAL_MODEL})")

    app.state.user_store = UserStore()

    yield

    logger.info("Shutting down Travel API Gateway")
    llm_client.close()
    travel_http.close()


# ============================================
# App
# ============================================

app = FastAPI(
    title="Travel API Gateway",
    description="Free-text travel requests turned into flight, hotel and activity searches.",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(travel_router)
app.include_router(auth_router)


def describe_validation_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{location or 'body'}: {error.get('msg', 'invalid')}"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies get the same {"error": ...} shape as every other failure"""
    problems = "; ".join(describe_validation_error(error) for error in exc.errors())
    logger.warning(f"Rejected request to {request.url.path}: {problems}")
    return JSONResponse(status_code=400, content={"error": f"Invalid request: {problems}"})


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "service": "Travel API Gateway",
        "version": app.version,
        "endpoints": [
            "/api/travel/ask/flight",
            "/api/travel/ask/hotel",
            "/api/travel/ask/activity",
            "/api/auth/register",
            "/api/auth/login",
            "/api/health",
        ],
        "timestamp": datetime.now().isoformat()
    }


@app.get("/api/health", response_model=HealthResponse)
def health_check():
    """Configuration health check"""
    missing = settings.missing_secrets()
    return HealthResponse(
        status="degraded" if missing else "healthy",
        service="travel-gateway",
        missing_secrets=missing,
    )


# ============================================
# Main
# ============================================

def run():
    import uvicorn
    uvicorn.run(
        "travel_gateway.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_ENV == "development"
    )


if __name__ == "__main__":
    run()
