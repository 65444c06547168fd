"""Built-in micro-apps and the slug -> implementation table that routes to them.

Both tables live here so a new app is added in one place.
"""
from familyhub.core.analytics import SOUNDSCAPE_EVENTS
from familyhub.core.registry import Registry
from familyhub.models.apps import DashboardSlot, MicroAppDefinition, Role, TextLabel

SOUNDSCAPES = MicroAppDefinition(
    id="soundscapes",
    slug="soundscapes",
    title="Soundscapes",
    icon=TextLabel("rocket"),
    route="/apps/soundscapes",
    allowed_roles=frozenset({Role.OWNER, Role.CAREGIVER, Role.CHILD}),
    allowed_plans=("plus", "family"),
    dashboard_slots=(DashboardSlot.HOME, DashboardSlot.KID),
    feature_flag="apps.soundscapes.enabled",
    events=SOUNDSCAPE_EVENTS,
)

BUILTIN_APPS = (SOUNDSCAPES,)

# slug -> "module:attribute" of the callable that renders the app
APP_IMPLEMENTATIONS = {
    "soundscapes": "familyhub.api.routes.soundscapes:render_app",
}


def register_builtin_apps(registry: Registry) -> None:
    """Register every built-in app. Safe to call more than once."""
    for app in BUILTIN_APPS:
        registry.register_app(app)
