import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobtrack.api.routes import applications, companies, contacts, health, jobs
from jobtrack.core import config
from jobtrack.core.errors import Conflict, TrackerError
from jobtrack.core.logging_config import sanitize_log_data, setup_logging
from jobtrack.db.models.company import Company
from jobtrack.schemas.company import CompanyResponse

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    "unauthenticated": 401,
    "invalid_argument": 400,
    "not_found": 404,
    "conflict": 409,
    "internal": 500,
    "deadline_exceeded": 504,
}


@asynccontextmanager
async def lifespan(_: FastAPI):
    setup_logging(config.LOG_LEVEL)
    if config.RUN_MIGRATIONS:
        from jobtrack.db.migrate import run_migrations
        run_migrations()
    yield


# ============================================
# ✅ FASTAPI APP INIT
# ============================================

app = FastAPI(title="Job Tracker API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    started_at = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started_at) * 1000.0
    logger.info(
        "http request method=%s path=%s status=%s duration_ms=%.2f",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    if request.query_params:
        logger.debug("query params %s", sanitize_log_data(dict(request.query_params)))
    return response


# ============================================
# ✅ ERROR MAPPING
# ============================================

@app.exception_handler(TrackerError)
async def tracker_error_handler(request: Request, exc: TrackerError):
    status_code = ERROR_STATUS_CODES.get(exc.kind, 500)
    if status_code >= 500:
        logger.error(f"{exc.kind} on {request.method} {request.url.path}: {exc.message} {exc.details or ''}")
    body = exc.to_dict()
    if isinstance(exc, Conflict) and isinstance(exc.resource, Company):
        body["company"] = CompanyResponse.model_validate(exc.resource).model_dump(mode="json")
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(status_code=status_code, content=body, headers=headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    fields = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        fields[".".join(location) or "general"] = error.get("msg", "is invalid")
    return JSONResponse(
        status_code=400,
        content={"error": "Validation failed", "message": "Invalid request", "fields": fields},
    )


# ============================================
# ✅ REGISTER ALL ROUTERS
# ============================================

app.include_router(health.router)
app.include_router(companies.router)
app.include_router(jobs.router)
app.include_router(applications.router)
app.include_router(contacts.router)


@app.get("/")
def root():
    return {"status": "Job Tracker API running"}
