"""Micro-app registry: idempotent registration and role/plan/flag/age-band visibility."""
import logging
import threading
from typing import List, Optional

from familyhub.config import DEFAULT_PLAN
from familyhub.core.entitlements import is_entitled
from familyhub.core.flags import FlagStore, get_flag
from familyhub.models.apps import DashboardSlot, MicroAppDefinition, Role, VisibilityContext

logger = logging.getLogger(__name__)


class Registry:
    """Catalog of registered micro-apps, kept in registration order.

    One instance is built at startup and handed to whatever needs lookups.
    Registration only ever adds, so reads take a snapshot under the lock and
    filter outside it.
    """

    def __init__(self, flag_store: Optional[FlagStore] = None) -> None:
        self._lock = threading.Lock()
        self._apps: List[MicroAppDefinition] = []
        self._flag_store = flag_store

    def register_app(self, app: MicroAppDefinition) -> None:
        """Add the app unless one with the same id is already registered."""
        with self._lock:
            if any(a.id == app.id for a in self._apps):
                logger.debug("Registry: %s already registered, skipping", app.id)
                return
            self._apps.append(app)
        logger.debug("Registry: registered %s (slug=%s)", app.id, app.slug)

    def get_apps(self) -> List[MicroAppDefinition]:
        with self._lock:
            return list(self._apps)

    def get_app_by_slug(self, slug: str) -> Optional[MicroAppDefinition]:
        with self._lock:
            for app in self._apps:
                if app.slug == slug:
                    return app
        return None

    def is_visible(self, app: MicroAppDefinition, context: VisibilityContext) -> bool:
        user = context.user
        plan = (user.plan if user else None) or DEFAULT_PLAN
        if user is not None and user.role not in app.allowed_roles:
            return False
        if not is_entitled(plan, app):
            return False
        if app.feature_flag and not get_flag(app.feature_flag, context.flags, self._flag_store):
            return False
        if user is not None and user.role == Role.CHILD:
            if Role.CHILD not in app.allowed_roles:
                return False
            if app.age_bands is None:
                return True
            band = context.child.age_band if context.child else None
            if not band:
                return False
            return band in app.age_bands
        return True

    def get_visible_apps(self, context: VisibilityContext) -> List[MicroAppDefinition]:
        """Apps the caller may see, in registration order."""
        return [app for app in self.get_apps() if self.is_visible(app, context)]

    def get_apps_for_slot(
        self, context: VisibilityContext, slot: DashboardSlot
    ) -> List[MicroAppDefinition]:
        """Visible apps that place a tile in the given dashboard slot."""
        return [app for app in self.get_visible_apps(context) if slot in app.dashboard_slots]
