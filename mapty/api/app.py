"""FastAPI app, CORS, error mapping and route registration."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(name)s: %(message)s",
)

from mapty.api.state import AppState, get_state
from mapty.config import MAPTY_WEB_ORIGIN, ensure_data_dir
from mapty.core.errors import (
    ConcurrentEditError,
    DecodeError,
    EditSessionError,
    MaptyError,
    StorageError,
    ValidationError,
    WorkoutNotFoundError,
)

# Import routes after state to avoid circular imports
from mapty.api.routes import notifications, position, session, workouts

__all__ = ["app", "AppState", "get_state"]

_state = get_state()

ERROR_STATUS = {
    ValidationError: 422,
    ConcurrentEditError: 409,
    EditSessionError: 409,
    WorkoutNotFoundError: 404,
    DecodeError: 500,
    StorageError: 500,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_data_dir()
    workouts_loaded = _state.load()
    logging.getLogger(__name__).info("Loaded %d workouts", len(workouts_loaded))

    yield

    _state.shutdown()


app = FastAPI(
    title="Mapty API",
    description="Local REST API for the Mapty workout log",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[MAPTY_WEB_ORIGIN] if MAPTY_WEB_ORIGIN else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(MaptyError)
async def mapty_error_handler(request: Request, exc: MaptyError):
    status_code = ERROR_STATUS.get(type(exc), 400)
    content = {"detail": exc.message}
    if isinstance(exc, ValidationError):
        content["fields"] = exc.fields
    return JSONResponse(status_code=status_code, content=content)


app.include_router(workouts.router, prefix="/api/workouts", tags=["workouts"])
app.include_router(session.router, prefix="/api/session", tags=["session"])
app.include_router(position.router, prefix="/api/position", tags=["position"])
app.include_router(notifications.router, prefix="/api/notifications", tags=["notifications"])
