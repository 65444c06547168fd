"""FastAPI app, CORS, and route registration."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from familyhub.config import LOG_LEVEL, ensure_data_dir

# Configure logging in the worker process (so core INFO logs are visible with uvicorn --reload)
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(levelname)s: %(name)s: %(message)s",
)

from familyhub.api.state import AppState, get_state

# Import routes after state to avoid circular imports
from familyhub.api.routes import apps, flags, soundscapes

__all__ = ["app", "AppState", "get_state"]

_state = get_state()


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_data_dir()
    logging.getLogger(__name__).info(
        "Registered apps: %s", ", ".join(a.id for a in _state.registry.get_apps())
    )

    yield

    # No fade or timer may outlive the process
    _state.close()


app = FastAPI(
    title="FamilyHub API",
    description="Micro-app catalog and soundscape player for family accounts",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(apps.router, prefix="/api/apps", tags=["apps"])
app.include_router(flags.router, prefix="/api/flags", tags=["flags"])
app.include_router(soundscapes.router, prefix="/api/soundscapes", tags=["soundscapes"])
