"""Caller identity from request headers.

The auth proxy in front of the service resolves the signed-in user, their
plan and the active child profile and forwards them as headers.
"""
from typing import Optional

from fastapi import Header, HTTPException

from familyhub.models.apps import ChildProfile, Role, UserIdentity, VisibilityContext


def _parse_role(value: str) -> Role:
    try:
        return Role(value.strip().lower())
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown role: {value}")


def get_visibility_context(
    x_user_id: Optional[str] = Header(None),
    x_user_role: Optional[str] = Header(None),
    x_user_plan: Optional[str] = Header(None),
    x_child_id: Optional[str] = Header(None),
    x_child_age_band: Optional[str] = Header(None),
) -> VisibilityContext:
    """Build the request's VisibilityContext; anonymous when no role is sent."""
    user = None
    if x_user_role:
        user = UserIdentity(
            id=x_user_id or "",
            role=_parse_role(x_user_role),
            plan=x_user_plan or None,
        )
    child = None
    if x_child_id or x_child_age_band:
        child = ChildProfile(id=x_child_id or "", age_band=x_child_age_band or None)
    return VisibilityContext(user=user, child=child)
