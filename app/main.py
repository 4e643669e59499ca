"""FastAPI application entry point.

To run:
    python -m app.main
or
    uvicorn app.main:app --port 8000
"""

import logging

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import router
from app.core.config import settings
from app.core.exceptions import PatientAPIError, PatientNotFound
from app.schemas.base import ErrorResponse

# Logging setup
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Patient Records API",
    description="Read-only search, filtering and pagination over a patient dataset",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, message: str, detail: str | None = None) -> JSONResponse:
    if not settings.EXPOSE_ERROR_DETAILS:
        detail = None
    body = ErrorResponse(success=False, message=message, error=detail)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def _log_context(request: Request) -> str:
    return "Error fetching patient" if "patient_id" in request.path_params else "Error fetching patients"


@app.exception_handler(PatientAPIError)
async def patient_api_error_handler(request: Request, exc: PatientAPIError):
    if isinstance(exc, PatientNotFound):
        logger.info(f"{exc} ({request.url.path})")
        return _error_response(exc.status_code, exc.message)
    logger.error(f"{_log_context(request)}: {exc}")
    return _error_response(exc.status_code, exc.message, str(exc))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"{_log_context(request)}: {exc}")
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", str(exc))


@app.get("/health")
def health_check():
    return {"status": "ok"}


app.include_router(router)


def main():
    logger.info(f"Server is running on http://localhost:{settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
