import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from weekplan.core.config import Settings
from weekplan.core.errors import ValidationError, WeekplanError
from weekplan.core.logging import setup_logging
from weekplan.core.migrations import RunMigrations
from weekplan.core.validation import FieldError, FieldFromRequestError
from weekplan.modules.core.router import router as core_router
from weekplan.modules.plan.router import router as plan_router
from weekplan.modules.shopping.router import router as shopping_router

setup_logging()

logger = logging.getLogger("weekplan.request")
startup_logger = logging.getLogger("weekplan.startup")

HTTP_ERROR_CODES = {
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "RESOURCE_NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if Settings.RunMigrationsOnStartup:
        RunMigrations()
    startup_logger.info("startup complete")
    yield


app = FastAPI(title="Weekplan API", lifespan=lifespan)

origin_list = Settings.AllowedOrigins
if origin_list:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def request_logger(request: Request, call_next):
    request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = int((time.perf_counter() - start) * 1000)

    parts = [f"{request.method} {request.url.path}"]
    if request.url.query:
        parts.append(f"query={request.url.query}")

    status = response.status_code
    if status >= 500:
        parts.append("ERROR: server error")
    elif status >= 400:
        parts.append("ERROR: client error")
    parts.append(f"status={status}")
    parts.append(f"{duration_ms}ms")
    parts.append(f"request_id={request_id}")

    log_msg = " | ".join(parts)
    if status >= 500:
        logger.error(log_msg)
    elif status >= 400:
        logger.warning(log_msg)
    else:
        logger.info(log_msg)

    response.headers["X-Request-Id"] = request_id
    return response


@app.exception_handler(WeekplanError)
async def weekplan_error_handler(_request: Request, exc: WeekplanError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.ToPayload())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = FieldFromRequestError(first.get("loc", ()))
    if first.get("type") == "json_invalid" or field is None:
        error = ValidationError(
            "Invalid request format",
            code="INVALID_REQUEST_FORMAT",
            details="Request body must be a valid JSON object",
        )
    else:
        error = FieldError(field, first.get("msg"))
    return JSONResponse(status_code=error.status_code, content=error.ToPayload())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    payload = {
        "success": False,
        "error": str(exc.detail),
        "code": HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
    }
    return JSONResponse(status_code=exc.status_code, content=payload, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logging.getLogger("weekplan.errors").exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "An unexpected error occurred",
            "code": "INTERNAL_SERVER_ERROR",
        },
    )


app.include_router(core_router)
app.include_router(plan_router)
app.include_router(shopping_router)
