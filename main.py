import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from metaclub.config import CORS_ORIGINS, UPLOAD_DIR, UPLOAD_URL_PREFIX
from metaclub.database import create_db_and_tables
from metaclub.exceptions import MetaclubError
from metaclub.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    setup_logging()
    create_db_and_tables()
    UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    logger.info("Database tables verified/created")
    yield


# Initialize FastAPI app
app = FastAPI(
    title="Metaverse Club",
    description="Event registration with UPI payment proof and an admin console",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[] if "*" in CORS_ORIGINS else CORS_ORIGINS,
    allow_origin_regex=".*" if "*" in CORS_ORIGINS else None,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Uploaded payment screenshots
app.mount(UPLOAD_URL_PREFIX, StaticFiles(directory=str(UPLOAD_DIR), check_dir=False), name="uploads")


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status": "error", "message": message})


@app.exception_handler(MetaclubError)
async def metaclub_error_handler(request: Request, exc: MetaclubError):
    return error_response(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return error_response(status.HTTP_400_BAD_REQUEST, message)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


# Include routers
from metaclub.routers import register, admin

app.include_router(register.router, tags=["registration"])
app.include_router(admin.router, tags=["admin"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
