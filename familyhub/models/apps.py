"""Micro-app catalog entries and the identity a visibility query runs against."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


class Role(str, Enum):
    OWNER = "owner"
    CAREGIVER = "caregiver"
    CHILD = "child"


class DashboardSlot(str, Enum):
    HOME = "home"
    KID = "kid"
    SUMMARY = "summary"


@dataclass(frozen=True)
class TextLabel:
    """Icon given as plain text (e.g. an initial or emoji)."""
    text: str


@dataclass(frozen=True)
class OpaqueRenderable:
    """Icon handed over by the frontend; never inspected here."""
    handle: Any


Icon = Union[TextLabel, OpaqueRenderable]


@dataclass(frozen=True)
class MicroAppDefinition:
    """Static registration record for one micro-app."""
    id: str
    slug: str
    title: str
    icon: Icon
    route: str
    allowed_roles: frozenset[Role]
    allowed_plans: tuple[str, ...] = ()  # empty = every plan
    age_bands: Optional[tuple[str, ...]] = None  # child gating
    feature_flag: Optional[str] = None
    dashboard_slots: tuple[DashboardSlot, ...] = ()
    events: tuple[str, ...] = ()  # analytics event names, not enforced


@dataclass(frozen=True)
class UserIdentity:
    id: str
    role: Role
    plan: Optional[str] = None


@dataclass(frozen=True)
class ChildProfile:
    id: str
    age_band: Optional[str] = None


@dataclass(frozen=True)
class VisibilityContext:
    """Request-scoped input to a visibility query."""
    user: Optional[UserIdentity] = None
    child: Optional[ChildProfile] = None
    flags: Optional[dict[str, bool]] = field(default=None, hash=False)
