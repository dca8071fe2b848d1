"""
BrandGuard - Main FastAPI Application

Checks design documents against brand guidelines (colors, fonts, logo
geometry), scores them and proposes or applies fixes.
"""
import logging
from pathlib import Path
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv
import structlog

# Load environment variables from project root or backend directory
env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)
else:
    load_dotenv()

from brandguard import __version__
from brandguard.config import get_settings
from brandguard.exceptions import RulesConfigError
from brandguard.models import HealthResponse
from brandguard.routes import compliance, remediation

settings = get_settings()

logging.basicConfig(format="%(message)s", level=settings.log_level)

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info(
        "application_starting",
        version=__version__,
        snapshot_source=settings.snapshot_source,
        brand_rules_path=settings.brand_rules_path
    )

    yield

    logger.info("application_shutting_down")


app = FastAPI(
    title="BrandGuard",
    description="""
    Brand compliance engine for design documents.

    ## Features

    - **Check**: Validate colors, fonts and logo geometry against brand rules
    - **Score**: 0-100 compliance score with a rating band
    - **Plan**: Proposed replacement colors, fonts and logo bounds
    - **Fix**: Apply all fixes to a document copy and re-check it
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

cors_origins = settings.cors_origins.split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins if settings.app_env == "production" else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RulesConfigError)
async def rules_config_exception_handler(request: Request, exc: RulesConfigError):
    logger.error("brand_rules_invalid", error=exc.message, path=request.url.path)
    return JSONResponse(status_code=500, content=exc.to_dict())


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error("unhandled_exception",
                 error=str(exc),
                 path=request.url.path,
                 method=request.method)
    return JSONResponse(
        status_code=500,
        content={"detail": "An internal error occurred. Please try again."}
    )


app.include_router(compliance.router)
app.include_router(remediation.router)


@app.get("/", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns application status, version and configuration summary.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        services={
            "snapshot_source": settings.snapshot_source,
            "custom_brand_rules": settings.brand_rules_path is not None
        }
    )


@app.get("/api/info")
async def api_info():
    """Get API information and available endpoints."""
    return {
        "name": "BrandGuard API",
        "version": __version__,
        "endpoints": {
            "health": "GET /",
            "compliance": {
                "check": "POST /compliance/check",
                "score": "POST /compliance/score",
                "demo": "GET /compliance/demo",
                "rules": "GET /compliance/rules"
            },
            "remediation": {
                "plan": "POST /remediation/plan",
                "fix": "POST /remediation/fix"
            },
            "docs": "GET /docs"
        }
    }


def main() -> None:
    """Run the API server."""
    import uvicorn

    uvicorn.run(
        "brandguard.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.app_env != "production"
    )


if __name__ == "__main__":
    main()
