"""
REST API for the LinkedIn jobs scraper.

Endpoints:
  GET /                 service info
  GET /api/search       top-N job search (optional company enrichment)
  GET /api/job/{job_id} full job record (optional enrichment / salary estimate)
  GET /api/health       uptime, cache statistics, effective config
  GET /api/features     premium feature descriptions

Run with `linkedin-jobs-api` or `uvicorn linkedin_jobs.api.main:app`.
"""

import time
import uuid
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from linkedin_jobs.api.rate_limit import create_limiter, rate_limit_exceeded_handler
from linkedin_jobs.config.settings import Settings, settings as default_settings
from linkedin_jobs.errors import FetchError, InvalidJobIdError, JobNotFoundError
from linkedin_jobs.scraping.linkedin_scraper import LinkedInScraper
from linkedin_jobs.scraping.schema import SCHEMA_VERSION
from linkedin_jobs.utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)

SERVICE_NAME = "LinkedIn Jobs Scraper API"
PREMIUM_ENRICHMENT = "companyEnrichment"

AVAILABLE_ENDPOINTS = [
    "/api/search",
    "/api/job/{job_id}",
    "/api/health",
    "/api/features",
]

PREMIUM_FEATURES = [
    {
        "name": "Company Enrichment",
        "description": "Fetches detailed company information including About section, "
                       "employee count, headquarters, and more",
        "endpoint": "Add ?enrichCompany=true to job details endpoint or "
                    "?enrichCompanies=true to search endpoint",
        "pricing": "Premium tier required",
    },
    {
        "name": "Salary Estimation",
        "description": "Estimates base, additional and total compensation when the "
                       "posting shows no salary",
        "endpoint": "Add ?estimateSalary=true to job details endpoint",
        "pricing": "Premium tier required",
    },
    {
        "name": "Clean Text Descriptions",
        "description": "Job descriptions converted to clean plain text",
        "endpoint": "Available in all job details responses",
        "pricing": "All tiers",
    },
    {
        "name": "Advanced Null Handling",
        "description": "Empty fields return null instead of empty strings for cleaner API responses",
        "endpoint": "All endpoints",
        "pricing": "All tiers",
    },
]


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def error_response(status_code: int, message: str, **extra: Any) -> JSONResponse:
    """JSON error body shared by every failure path."""
    content: Dict[str, Any] = {"success": False, "error": message, "timestamp": _now_iso()}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


def create_app(
    settings: Optional[Settings] = None,
    scraper: Optional[LinkedInScraper] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings instance (defaults to the module-level settings)
        scraper: Scraper to serve from; one is built from settings when omitted
    """
    config = settings or default_settings
    scraper = scraper or LinkedInScraper(config=config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            f"{SERVICE_NAME} v{SCHEMA_VERSION} | cache TTL {config.CACHE_TTL}s | "
            f"rate limit {config.rate_limit}"
        )
        yield
        scraper.close()

    app = FastAPI(title=SERVICE_NAME, version=SCHEMA_VERSION, lifespan=lifespan)
    app.state.settings = config
    app.state.scraper = scraper
    app.state.started_at = time.monotonic()

    # ── Middleware ──────────────────────────────────────────

    app.state.limiter = create_limiter(config)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # ── Exception handlers ──────────────────────────────────

    @app.exception_handler(InvalidJobIdError)
    async def invalid_job_id_handler(request: Request, exc: InvalidJobIdError):
        return error_response(400, str(exc))

    @app.exception_handler(JobNotFoundError)
    async def job_not_found_handler(request: Request, exc: JobNotFoundError):
        return error_response(404, "Job not found")

    @app.exception_handler(FetchError)
    async def fetch_error_handler(request: Request, exc: FetchError):
        logger.error(f"Upstream fetch failed: {exc}")
        return error_response(502, "Failed to fetch data from LinkedIn")

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        field = ".".join(str(part) for part in first.get("loc", [])[1:])
        return error_response(400, f"Invalid parameter '{field}': {first.get('msg', 'invalid value')}")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(
                status_code=404,
                content={
                    "success": False,
                    "error": "Endpoint not found",
                    "available_endpoints": AVAILABLE_ENDPOINTS,
                    "timestamp": _now_iso(),
                },
            )
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        logger.error(f"Server error [{request_id}]: {exc}", exc_info=exc)
        return error_response(500, "Internal server error", request_id=request_id)

    # ── Routes ──────────────────────────────────────────────

    @app.get("/")
    def service_info():
        return {
            "name": SERVICE_NAME,
            "version": SCHEMA_VERSION,
            "status": "operational",
            "features": {
                "descriptionText": "Clean text version of job descriptions",
                "companyEnrichment": "Premium company details available",
                "salaryEstimation": "Market-based salary estimates when none is posted",
                "nullHandling": "Empty fields return null instead of empty strings",
            },
            "endpoints": {
                "search": "/api/search?keywords=software+engineer&location=remote&enrichCompanies=true",
                "jobDetails": "/api/job/{job_id}?enrichCompany=true&estimateSalary=true",
                "health": "/api/health",
                "features": "/api/features",
            },
            "cache": {"enabled": True, "ttl": f"{config.CACHE_TTL} seconds"},
        }

    @app.get("/api/search")
    def search(
        keywords: str = "",
        location: str = "",
        remote: bool = False,
        limit: int = 25,
        enrich_companies: bool = Query(False, alias="enrichCompanies"),
        date_posted: Optional[str] = Query(None, alias="datePosted"),
        job_type: Optional[str] = Query(None, alias="jobType"),
        experience_level: Optional[str] = Query(None, alias="experienceLevel"),
    ):
        if not keywords.strip():
            return error_response(400, "Keywords parameter is required")
        if limit < 1 or limit > config.MAX_RESULTS:
            return error_response(400, f"Limit must be between 1 and {config.MAX_RESULTS}")

        result = scraper.search_jobs(
            keywords.strip(),
            location=location.strip(),
            remote=remote,
            limit=limit,
            enrich_companies=enrich_companies,
            date_posted=date_posted,
            job_type=job_type,
            experience_level=experience_level,
        )
        if enrich_companies:
            result["premium_feature"] = PREMIUM_ENRICHMENT
        return result

    @app.get("/api/job/{job_id}")
    def job_details(
        job_id: str,
        enrich_company: bool = Query(False, alias="enrichCompany"),
        estimate_salary: bool = Query(False, alias="estimateSalary"),
    ):
        detail = scraper.get_job_details(
            job_id, enrich_company=enrich_company, estimate_salary=estimate_salary
        )
        if not detail.get("title"):
            return error_response(404, "Job not found")

        return {
            "success": True,
            "data": detail,
            "premium": PREMIUM_ENRICHMENT if enrich_company and detail.get("company_details") else None,
        }

    @app.get("/api/health")
    def health():
        return {
            "status": "healthy",
            "timestamp": _now_iso(),
            "uptime": round(time.monotonic() - app.state.started_at, 3),
            "cache": scraper.cache.stats(),
            "config": {
                "company_enrichment": config.ENABLE_COMPANY_ENRICHMENT,
                "cache_ttl": config.CACHE_TTL,
                "rate_limit": config.RATE_LIMIT_MAX,
                "rate_limit_window_minutes": config.RATE_LIMIT_WINDOW_MINUTES,
                "max_results": config.MAX_RESULTS,
            },
        }

    @app.get("/api/features")
    def features():
        return {"premium_features": PREMIUM_FEATURES}

    return app


app = create_app()


def run():
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    setup_logging(default_settings.LOG_LEVEL)
    uvicorn.run(
        app,
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_level=default_settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
