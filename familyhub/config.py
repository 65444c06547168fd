"""Configuration: env, data paths, feature flags, soundscape timings."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Base paths (project root = parent of familyhub package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so FAMILYHUB_FLAGS etc. are set
load_dotenv(BASE_DIR / ".env")

DATA_DIR = Path(os.getenv("FAMILYHUB_DATA_DIR", str(BASE_DIR / "data")))
FAVORITES_PATH = DATA_DIR / "soundscape_favorites.json"

# API
API_HOST = os.getenv("FAMILYHUB_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("FAMILYHUB_API_PORT", "8000"))
LOG_LEVEL = os.getenv("FAMILYHUB_LOG_LEVEL", "INFO").upper()

# Feature flags seeded into the process-wide store, e.g.
# FAMILYHUB_FLAGS="apps.soundscapes.enabled=on,apps.recipes.enabled=off"
FEATURE_FLAGS = os.getenv("FAMILYHUB_FLAGS", "")

# Entitlements
DEFAULT_PLAN = "free"
# Plan assumed by the routing gate when the caller sends none
GATE_PLAN = os.getenv("FAMILYHUB_GATE_PLAN", DEFAULT_PLAN)

# Soundscapes
DEFAULT_VOLUME = 0.8
FADE_TICK_MS = 50
TIMER_FADE_OUT_MS = 3000
PARENT_FADE_IN_MS = 1000
PARENT_STOP_FADE_MS = 1000
BEDTIME_FADE_IN_MS = 1500
# Longest fade a client may request over the API (10 minutes)
MAX_FADE_MS = 600_000
# Longest sleep timer a client may request over the API (one day)
MAX_TIMER_MINUTES = 24 * 60
BEDTIME_MIX_ID = "bedtime"
# Prefix for layer files (e.g. a CDN); empty keeps the site-relative paths
AUDIO_BASE_URL = os.getenv("FAMILYHUB_AUDIO_BASE_URL", "")


def parse_flags(raw: str) -> dict[str, bool]:
    """Parse "name=on,other=off" into a flag map. A bare name means on."""
    flags: dict[str, bool] = {}
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        name, _, value = part.partition("=")
        value = value.strip().lower() or "on"
        flags[name.strip()] = value in ("1", "true", "yes", "on")
    return flags


def ensure_data_dir() -> None:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
