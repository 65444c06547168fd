"""Micro-app catalog: visible tiles, routing gate, upsell copy."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from familyhub.api.identity import get_visibility_context
from familyhub.api.state import AppState, get_state
from familyhub.config import DEFAULT_PLAN, GATE_PLAN
from familyhub.core.entitlements import get_upsell_copy
from familyhub.core.resolver import AppNotFound, resolve_app
from familyhub.models.apps import DashboardSlot, MicroAppDefinition, TextLabel, VisibilityContext

router = APIRouter()


def _icon_to_dict(icon) -> dict:
    if isinstance(icon, TextLabel):
        return {"type": "text", "text": icon.text}
    return {"type": "renderable", "handle": icon.handle}


def app_to_dict(app: MicroAppDefinition) -> dict:
    return {
        "id": app.id,
        "slug": app.slug,
        "title": app.title,
        "icon": _icon_to_dict(app.icon),
        "route": app.route,
        "allowed_roles": sorted(r.value for r in app.allowed_roles),
        "allowed_plans": list(app.allowed_plans),
        "age_bands": list(app.age_bands) if app.age_bands is not None else None,
        "feature_flag": app.feature_flag,
        "dashboard_slots": [s.value for s in app.dashboard_slots],
        "events": list(app.events),
    }


@router.get("")
def list_visible_apps(
    slot: Optional[DashboardSlot] = None,
    context: VisibilityContext = Depends(get_visibility_context),
    state: AppState = Depends(get_state),
):
    """Apps the caller can see, optionally only those placed in a dashboard slot."""
    if slot is not None:
        apps = state.registry.get_apps_for_slot(context, slot)
    else:
        apps = state.registry.get_visible_apps(context)
    return [app_to_dict(a) for a in apps]


@router.get("/{slug}")
def open_app(
    slug: str,
    context: VisibilityContext = Depends(get_visibility_context),
    state: AppState = Depends(get_state),
):
    """Render an app if it exists and the caller's plan and flags allow it.

    Gated apps answer 404 exactly like unknown ones.
    """
    plan = (context.user.plan if context.user else None) or GATE_PLAN
    try:
        resolved = resolve_app(state.registry, slug, plan, flag_store=state.flag_store)
    except AppNotFound:
        raise HTTPException(status_code=404, detail="Not found")
    render = resolved.load()
    return render(resolved.definition)


@router.get("/{slug}/upsell")
def upsell(
    slug: str,
    context: VisibilityContext = Depends(get_visibility_context),
    state: AppState = Depends(get_state),
):
    """Upgrade prompt for the caller's plan; message is null when already entitled."""
    app = state.registry.get_app_by_slug(slug)
    if app is None:
        raise HTTPException(status_code=404, detail="Not found")
    plan = (context.user.plan if context.user else None) or DEFAULT_PLAN
    return {"slug": app.slug, "plan": plan, "message": get_upsell_copy(app, plan)}
