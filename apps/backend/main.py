from fastapi import FastAPI, Request, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv
from contextlib import asynccontextmanager
import os
import time
import logging
import traceback

load_dotenv()

from app.config import Capabilities, get_env, get_env_presence, is_dev_mode
from app.errors import JoblyError
from app.auth_routes import router as auth_router
from app.companies_routes import router as companies_router
from app.jobs_routes import router as jobs_router
from app.users_routes import router as users_router
from app.rate_limit import limiter
from slowapi.errors import RateLimitExceeded
from slowapi import _rate_limit_exceeded_handler
from security.auth import ensure_admin

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application lifecycle events."""
    jobly_env = get_env()
    logger.info(f"[jobly] env: JOBLY_ENV={jobly_env}")
    if jobly_env == "production" and not os.getenv("SECRET_KEY"):
        logger.warning("[jobly] SECRET_KEY is not set; tokens are signed with the dev key")

    yield

    logger.info("[jobly] shutting down")


app = FastAPI(title="Jobly API", version="0.1.0", lifespan=lifespan)

# Add rate limiter state
app.state.limiter = limiter

# Rate limit exceeded handler
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


def error_response(message, status: int) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={"error": {"message": message, "status": status}},
    )


@app.exception_handler(JoblyError)
async def jobly_error_handler(request: Request, exc: JoblyError):
    if exc.status >= 500:
        logger.error(f"[jobly] {request.method} {request.url.path}: {exc.message}")
    return error_response(exc.message, exc.status)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err["loc"])
        messages.append(f"{location}: {err['msg']}")
    return error_response(messages, 400)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.detail, exc.status_code)


# Error masking middleware
@app.middleware("http")
async def error_masking_middleware(request: Request, call_next):
    """Log each request; mask unhandled errors in production, show them in dev."""
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception as e:
        is_dev = is_dev_mode()

        # Log the full error
        logger.error(f"Unhandled error: {str(e)}")
        logger.error(traceback.format_exc())

        # Return masked or detailed error based on environment
        if is_dev:
            return JSONResponse(
                status_code=500,
                content={
                    "error": {"message": str(e), "status": 500},
                    "traceback": traceback.format_exc(),
                }
            )
        return error_response("An internal error occurred. Please try again later.", 500)

    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(f"{request.method} {request.url.path} {response.status_code} - {elapsed_ms:.1f} ms")
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "http://localhost:3000").split(","),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(companies_router)
app.include_router(jobs_router)
app.include_router(users_router)


@app.get("/healthz")
def healthz():
    return Capabilities.get_status()


@app.get("/admin/config/env", dependencies=[Depends(ensure_admin)])
def config_env():
    return get_env_presence()


if __name__ == "__main__":
    import uvicorn
    from app.config import get_port

    uvicorn.run("main:app", host="0.0.0.0", port=get_port(), reload=is_dev_mode())
