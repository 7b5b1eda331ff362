from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from onboarding.api import routers
import logging
from onboarding.core.config import settings
from onboarding.core.exceptions import AppException
from onboarding.db.session import connect_db_pool, close_db_pool
from onboarding.middleware.request_context import RequestContextMiddleware

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

_HTTP_CODES = {
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    await connect_db_pool()
    yield
    await close_db_pool()


app = FastAPI(
    title="Customer Onboarding API",
    description="Customer registration, document upload and staff administration for the core banking front end",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(RequestContextMiddleware)
app.include_router(routers.router)

if settings.STORAGE_BACKEND.strip().lower() != "s3":
    app.mount("/files", StaticFiles(directory=settings.STORAGE_LOCAL_ROOT, check_dir=False), name="files")


def error_body(message, code: str, details=None) -> dict:
    body = {"error": message, "code": code}
    if details is not None:
        body["details"] = jsonable_encoder(details)
    return body


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.detail, exc.code, exc.details),
        headers=exc.headers,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.detail, _HTTP_CODES.get(exc.status_code, "HTTP_ERROR")),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Invalid request data", "VALIDATION_ERROR", exc.errors()),
    )


@app.exception_handler(Exception)
async def unexpected_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Internal Server Error on %s %s (request_id=%s)",
        request.method, request.url.path, getattr(request.state, "request_id", None),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error", "UNEXPECTED", str(exc)),
    )


@app.get("/")
async def root():
    return {"message": "Welcome to the Customer Onboarding API"}
