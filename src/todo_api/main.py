import logging
import os
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from .errors import TodoAPIError
from .observability import setup_logging
from .repositories import build_repository
from .routers import todos as todos_router
from .settings import get_settings

HOME_TEMPLATE = "home.tpl"

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "home", "description": "Landing page."},
    {"name": "todos", "description": "CRUD operations for Todo items."},
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup/shutdown lifecycle. A missing landing-page template or an
    unreachable database aborts startup.
    """
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    template_path = os.path.join(settings.template_dir, HOME_TEMPLATE)
    if not os.path.isfile(template_path):
        logger.critical("Landing page template not found: %s", template_path)
        raise RuntimeError(f"template not found: {template_path}")
    app.state.templates = Jinja2Templates(directory=settings.template_dir)

    try:
        app.state.repository = build_repository(settings)
    except Exception:
        logger.critical("Failed to initialise todo store", exc_info=True)
        raise

    logger.info("Todo service started")
    try:
        yield
    finally:
        app.state.repository.close()
        logger.info("Todo service shutting down")


app = FastAPI(
    title="Todo Service",
    description="HTTP CRUD service for a todo list backed by MongoDB.",
    version="0.1.0",
    openapi_tags=openapi_tags,
    lifespan=lifespan,
)

_settings = get_settings()

# Configure CORS based on settings (CORS_ALLOW_ORIGINS), with '*' fallback
allow_all = (_settings.cors_allow_origins == ["*"]) or (len(_settings.cors_allow_origins) == 0)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if allow_all else _settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log method, path, status and duration of every request."""
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = round((time.perf_counter() - start) * 1000, 2)
    logger.info(
        '"%s %s" %s in %.2fms',
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
            "client": request.client.host if request.client else None,
        },
    )
    return response


@app.exception_handler(TodoAPIError)
async def todo_api_error_handler(request: Request, exc: TodoAPIError) -> JSONResponse:
    """Render handler errors as {"message": ..., "error": ...}."""
    if exc.status_code >= 500:
        logger.error("%s: %s", exc.message, exc.error, extra={"path": request.url.path})
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Return a consistent JSON structure for request validation errors.

    Response format:
        {
            "error": "ValidationError",
            "message": "Request validation failed",
            "detail": [... pydantic/fastapi error details ...]
        }
    """
    logger.warning("Validation error on %s", request.url.path, extra={"path": request.url.path})
    return JSONResponse(
        status_code=400,
        content={
            "error": "ValidationError",
            "message": "Request validation failed",
            "detail": [
                {"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]}
                for e in exc.errors()
            ],
        },
    )


# PUBLIC_INTERFACE
@app.get("/", response_class=HTMLResponse, summary="Home", tags=["home"])
def home(request: Request):
    """
    Render the static landing page.
    """
    return request.app.state.templates.TemplateResponse(request, HOME_TEMPLATE)


app.include_router(todos_router.router)
