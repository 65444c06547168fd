"""Plan entitlements for micro-apps."""
from typing import Optional

from familyhub.models.apps import MicroAppDefinition


def is_entitled(plan: str, app: MicroAppDefinition) -> bool:
    """True if the app has no plan restriction or lists the plan."""
    if not app.allowed_plans:
        return True
    return plan in app.allowed_plans


def get_upsell_copy(app: MicroAppDefinition, plan: str) -> Optional[str]:
    """Return the upgrade prompt for a plan that can't open the app, else None."""
    if is_entitled(plan, app):
        return None
    needed = ", ".join(app.allowed_plans)
    return f"This feature requires a {needed} plan."
