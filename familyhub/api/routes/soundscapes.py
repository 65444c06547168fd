"""Soundscapes: mix catalog, playback control, bedtime lock, favorites."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from familyhub.api.identity import get_visibility_context
from familyhub.api.state import AppState, get_state
from familyhub.config import BEDTIME_MIX_ID, MAX_FADE_MS, MAX_TIMER_MINUTES
from familyhub.core import analytics
from familyhub.core.favorites_store import list_favorites, toggle_favorite
from familyhub.core.mixes import MIXES, asset_files, get_mix
from familyhub.models.apps import MicroAppDefinition, VisibilityContext
from familyhub.models.soundscapes import MixConfig

router = APIRouter()


def _mix_to_dict(mix: MixConfig) -> dict:
    return {
        "id": mix.id,
        "title": mix.title,
        "layers": [
            {
                "id": layer.id,
                "type": layer.type.value,
                "file": layer.file,
                "gain": layer.gain,
                "loop_start": layer.loop_start,
                "loop_end": layer.loop_end,
            }
            for layer in mix.layers
        ],
    }


def render_app(definition: MicroAppDefinition) -> dict:
    """Page payload for the soundscapes micro-app (looked up by the routing gate)."""
    return {
        "app": definition.id,
        "title": definition.title,
        "route": definition.route,
        "mixes": [_mix_to_dict(m) for m in MIXES],
        "default_mix": MIXES[0].id,
    }


class StartBody(BaseModel):
    mix_id: str


class FadeBody(BaseModel):
    duration_ms: float = Field(ge=0, le=MAX_FADE_MS, allow_inf_nan=False)


class VolumeBody(BaseModel):
    volume: float = Field(allow_inf_nan=False)


class TimerBody(BaseModel):
    minutes: Optional[float] = Field(default=None, le=MAX_TIMER_MINUTES, allow_inf_nan=False)


class BedtimeBody(BaseModel):
    child_id: str
    mix_id: str = BEDTIME_MIX_ID


class FavoriteBody(BaseModel):
    mix_id: str
    family_id: str
    child_id: Optional[str] = None


def _state_to_dict(state: AppState) -> dict:
    session = state.soundscapes
    snap = session.player.snapshot()
    return {
        "status": snap.status.value,
        "mix_id": snap.mix_id,
        "volume": snap.volume,
        "live_sources": snap.live_sources,
        "fade_pending": snap.fade_pending,
        "timer_pending": snap.timer_pending,
        "bedtime_locked": session.bedtime_locked,
    }


@router.get("/mixes")
def list_mixes():
    return [_mix_to_dict(m) for m in MIXES]


@router.get("/assets")
def list_assets():
    """Layer files a client should precache for offline playback."""
    return {"files": asset_files()}


@router.get("/state")
def get_playback_state(state: AppState = Depends(get_state)):
    return _state_to_dict(state)


@router.post("/start")
def start(
    body: StartBody,
    context: VisibilityContext = Depends(get_visibility_context),
    state: AppState = Depends(get_state),
):
    """Start a mix with a short fade-in."""
    role = context.user.role.value if context.user else "caregiver"
    if not state.soundscapes.start(body.mix_id, role=role):
        raise HTTPException(status_code=404, detail="Mix not found")
    return _state_to_dict(state)


@router.post("/stop")
def stop(immediate: bool = False, state: AppState = Depends(get_state)):
    """Fade out and stop; immediate=true cuts the sound without the completion
    event and releases the bedtime lock."""
    if immediate:
        state.soundscapes.stop_now()
    else:
        state.soundscapes.stop()
    return _state_to_dict(state)


@router.post("/fade-in")
def fade_in(body: FadeBody, state: AppState = Depends(get_state)):
    state.soundscapes.player.fade_in(body.duration_ms)
    return _state_to_dict(state)


@router.post("/fade-out")
def fade_out(body: FadeBody, state: AppState = Depends(get_state)):
    state.soundscapes.player.fade_out(body.duration_ms)
    return _state_to_dict(state)


@router.post("/volume")
def set_volume(body: VolumeBody, state: AppState = Depends(get_state)):
    """Set master volume; values outside [0, 1] are clamped."""
    state.soundscapes.player.set_volume(body.volume)
    return _state_to_dict(state)


@router.post("/timer")
def set_timer(body: TimerBody, state: AppState = Depends(get_state)):
    """Fade out after the given minutes; null or <= 0 clears the timer."""
    state.soundscapes.set_timer(body.minutes)
    return _state_to_dict(state)


@router.post("/bedtime")
def start_bedtime(body: BedtimeBody, state: AppState = Depends(get_state)):
    """Kid view: lock navigation and start the bedtime mix."""
    if not state.soundscapes.start_bedtime(body.child_id, body.mix_id):
        raise HTTPException(status_code=404, detail="Mix not found")
    return _state_to_dict(state)


@router.post("/parent-exit")
def parent_exit(state: AppState = Depends(get_state)):
    state.soundscapes.parent_exit()
    return _state_to_dict(state)


@router.get("/favorites")
def get_favorites(family_id: str):
    return [
        {"mix_id": f.mix_id, "child_id": f.child_id, "created_at": f.created_at}
        for f in list_favorites(family_id)
    ]


@router.post("/favorites")
def favorite(body: FavoriteBody):
    """Toggle a mix in the family's favorites."""
    if get_mix(body.mix_id) is None:
        raise HTTPException(status_code=404, detail="Mix not found")
    result = toggle_favorite(body.mix_id, body.family_id, body.child_id)
    if result["favorited"]:
        analytics.track("soundscape_favorited", {"mix": body.mix_id})
    return result
