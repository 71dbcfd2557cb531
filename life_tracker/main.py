import os
import time
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from life_tracker.db.core import Database
from life_tracker.logging_config import setup_logging, get_logger, log_request
from life_tracker.routers.notes import router as notes_router
from life_tracker.routers.habits import router as habits_router
from life_tracker.routers.habit_logs import router as habit_logs_router
from life_tracker.routers.transactions import router as transactions_router
from life_tracker.routers.checklists import router as checklists_router
from life_tracker.routers.checklist_items import router as checklist_items_router
from life_tracker.routers.goals import router as goals_router
from life_tracker.routers.dashboard import router as dashboard_router
from life_tracker.routers.notifications import router as notifications_router

logger = get_logger(__name__)


def _cors_origins() -> list:
    raw = os.getenv("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def _describe_validation_error(exc: RequestValidationError) -> str:
    problems = []
    for error in exc.errors():
        # Drop the "body"/"query"/"path" prefix FastAPI puts on every location
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        message = error.get("msg", "Invalid value")
        problems.append(f"{location}: {message}" if location else message)
    return "Invalid request: " + "; ".join(problems)


def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Build the API. Each app owns its store; pass a Database to use something
    other than DATABASE_URL (tests hand in a fresh in-memory one).
    """
    setup_logging()

    database = database or Database()
    database.create_all()

    app = FastAPI(title="Life Tracker API")
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            log_request(request.method, request.url.path, 500, (time.perf_counter() - start_time) * 1000)
            raise
        log_request(request.method, request.url.path, response.status_code, (time.perf_counter() - start_time) * 1000)
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = _describe_validation_error(exc)
        logger.info(f"{request.method} {request.url.path} rejected: {message}")
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )

    app.include_router(notes_router)
    app.include_router(habits_router)
    app.include_router(habit_logs_router)
    app.include_router(transactions_router)
    app.include_router(checklists_router)
    app.include_router(checklist_items_router)
    app.include_router(goals_router)
    app.include_router(dashboard_router)
    app.include_router(notifications_router)

    @app.get("/")
    def read_root():
        return "Server is running."

    return app


app = create_app()
