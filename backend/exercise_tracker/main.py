"""FastAPI application factory and HTTP controllers.

This module defines the HTTP endpoints of the exercise tracker.
Controllers are intentionally thin: they accept form and query values,
delegate to services, and return JSON responses.

Endpoints implemented:
- GET /
- POST /api/users
- GET /api/users
- POST /api/users/{user_id}/exercises
- GET /api/users/{user_id}/logs
- GET /health
"""

from fastapi import APIRouter, Depends, FastAPI, Form, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlmodel import Session
from typing import List, Optional
from pathlib import Path
import json
import logging
import time
import uuid

from .config import Settings
from .database import Database, get_session
from .errors import ExerciseTrackerError
from .schemas import ErrorOut, ExerciseOut, LogOut, UserOut
from . import services

logger = logging.getLogger("exercise_tracker.api")

BASE = Path(__file__).resolve().parent.parent
VIEWS_DIR = BASE / "views"
PUBLIC_DIR = BASE / "public"

router = APIRouter()

STORE_ERRORS = {500: {"model": ErrorOut}}
USER_ERRORS = {404: {"model": ErrorOut}, 500: {"model": ErrorOut}}


@router.get("/", include_in_schema=False)
def home():
    """Serve the landing page."""
    return FileResponse(VIEWS_DIR / "index.html")


@router.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok"}


@router.post("/api/users", response_model=UserOut, responses=STORE_ERRORS)
def create_user(username: Optional[str] = Form(default=None), db: Session = Depends(get_session)):
    """Register a new user. Usernames are neither unique nor validated."""
    return services.UserService(db).create_user(username)


@router.get("/api/users", response_model=List[UserOut], responses=STORE_ERRORS)
def list_users(db: Session = Depends(get_session)):
    """List every registered user as `{username, _id}`."""
    return services.UserService(db).list_users()


@router.post("/api/users/{user_id}/exercises", response_model=ExerciseOut, responses=USER_ERRORS)
def add_exercise(
    user_id: str,
    description: Optional[str] = Form(default=None),
    duration: Optional[str] = Form(default=None),
    date: Optional[str] = Form(default=None),
    db: Session = Depends(get_session),
):
    """Log an exercise for `user_id`.

    `duration` is coerced to an integer and `date` defaults to now. The
    response joins the user's `_id`/`username` with the new exercise.
    """
    return services.ExerciseService(db).add_exercise(user_id, description, duration, date)


@router.get("/api/users/{user_id}/logs", response_model=LogOut, responses=USER_ERRORS)
def get_log(
    user_id: str,
    date_from: Optional[str] = Query(default=None, alias="from"),
    date_to: Optional[str] = Query(default=None, alias="to"),
    limit: Optional[str] = None,
    db: Session = Depends(get_session),
):
    """Return the exercise log of `user_id`.

    Optional `from`/`to` bound the exercise date (inclusive) and `limit`
    caps the number of entries.
    """
    return services.ExerciseService(db).get_log(user_id, date_from, date_to, limit)


def register_error_handlers(app: FastAPI) -> None:
    """Render every failure as `{"error": message}`."""

    @app.exception_handler(ExerciseTrackerError)
    async def tracker_error_handler(request: Request, exc: ExerciseTrackerError):
        log = logger.error if exc.http_status >= 500 else logger.warning
        log("%s on %s %s", exc.message, request.method, request.url.path)
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        logger.warning("HTTP %s on %s %s: %s", exc.status_code, request.method, request.url.path, exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request data"},
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application and open its database handle.

    Settings default to the process environment. Tables are created on
    startup; there is no migration step.
    """
    settings = settings or Settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    app = FastAPI(title="Exercise Tracker API")
    app.state.settings = settings
    app.state.database = Database(settings.DATABASE_URL, echo=settings.DB_ECHO)
    app.state.database.create_db_and_tables()

    # The bundled landing page and any browser client may live on another origin.
    if settings.ALLOW_DEV_CORS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )

    if PUBLIC_DIR.exists():
        app.mount("/public", StaticFiles(directory=PUBLIC_DIR), name="public")

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
        request.state.request_id = req_id
        started = time.perf_counter()
        context = {
            "request_id": req_id,
            "path": request.url.path,
            "method": request.method,
            "client": request.client.host if request.client else "unknown",
        }
        response: Response
        try:
            response = await call_next(request)
        except Exception:
            context["duration_ms"] = round((time.perf_counter() - started) * 1000.0, 2)
            logger.exception("request_failed %s", json.dumps(context, ensure_ascii=True))
            raise
        response.headers["X-Request-ID"] = req_id
        context["status_code"] = response.status_code
        context["duration_ms"] = round((time.perf_counter() - started) * 1000.0, 2)
        logger.info("request_done %s", json.dumps(context, ensure_ascii=True))
        return response

    register_error_handlers(app)
    app.include_router(router)
    logger.info("application ready, database=%s", Database.describe(settings.DATABASE_URL))
    return app
