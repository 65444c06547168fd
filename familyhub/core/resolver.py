"""Routing gate: decide whether an app slug may render and which implementation to load.

Missing and gated apps both surface as AppNotFound so callers can't tell which
apps exist. Age-band gating is left to the app itself; this is the coarse
top-level check.
"""
import importlib
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from familyhub.core.entitlements import is_entitled
from familyhub.core.flags import FlagStore, get_flag
from familyhub.core.register_all import APP_IMPLEMENTATIONS
from familyhub.core.registry import Registry
from familyhub.models.apps import MicroAppDefinition

logger = logging.getLogger(__name__)


class AppNotFound(LookupError):
    """Slug is unknown, or known but not available to this caller."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"App not found: {slug}")
        self.slug = slug


class AppConfigurationError(RuntimeError):
    """A registered app has no implementation mapped to its slug."""


@dataclass(frozen=True)
class ResolvedApp:
    definition: MicroAppDefinition
    implementation: str  # "module:attribute"

    def load(self) -> Any:
        """Import and return the implementation's render callable."""
        module_name, _, attr = self.implementation.partition(":")
        module = importlib.import_module(module_name)
        return getattr(module, attr)


def resolve_app(
    registry: Registry,
    slug: str,
    plan: str,
    flags: Optional[Mapping[str, bool]] = None,
    flag_store: Optional[FlagStore] = None,
    implementations: Mapping[str, str] = APP_IMPLEMENTATIONS,
) -> ResolvedApp:
    """Return the app to render for slug, or raise AppNotFound / AppConfigurationError."""
    app = registry.get_app_by_slug(slug)
    if app is None:
        raise AppNotFound(slug)

    flag_ok = get_flag(app.feature_flag, flags, flag_store) if app.feature_flag else True
    if not flag_ok or not is_entitled(plan, app):
        logger.debug("Resolve: %s gated (flag_ok=%s, plan=%s)", slug, flag_ok, plan)
        raise AppNotFound(slug)

    implementation = implementations.get(app.slug)
    if implementation is None:
        logger.error("Resolve: app %s is registered but has no implementation", app.slug)
        raise AppConfigurationError(f"No implementation mapped for app slug {app.slug!r}")
    return ResolvedApp(definition=app, implementation=implementation)
