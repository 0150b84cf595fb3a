# backend/policy_files/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import documents_router, uploads_router
from .backends import build_storage_backends
from .config import settings
from .database import init_models
from .errors import PolicyFilesError
from .utils.logging import api_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_models()
    app.state.backends = build_storage_backends(settings)
    api_logger.info("Policy Files API started", extra={"port": settings.PORT})
    yield


app = FastAPI(
    title="Policy Files API",
    version="1.0.0",
    description="API for uploading policy files to Firebase or Supabase storage",
    docs_url="/api-docs",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(uploads_router)
app.include_router(documents_router)


@app.exception_handler(PolicyFilesError)
async def policy_files_error_handler(request: Request, exc: PolicyFilesError):
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    api_logger.error("Unhandled error", extra={
        "path": request.url.path,
        "method": request.method,
        "error_type": type(exc).__name__
    }, exc_info=(type(exc), exc, exc.__traceback__))
    return JSONResponse({"error": str(exc)}, status_code=500)


@app.get("/")
async def root():
    return {"message": "Policy Files API is running"}
