"""Process-wide feature flags."""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from familyhub.api.state import AppState, get_state

router = APIRouter()


class FlagBody(BaseModel):
    name: str
    value: bool


@router.get("")
def list_flags(state: AppState = Depends(get_state)):
    return state.flag_store.snapshot()


@router.post("")
def expose_flag(body: FlagBody, state: AppState = Depends(get_state)):
    """Turn a flag on or off for the whole process."""
    state.flag_store.expose(body.name, body.value)
    return {"ok": True, "name": body.name, "value": body.value}
