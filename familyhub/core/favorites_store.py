"""Persist and load favorite soundscape mixes (JSON)."""
import json
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from familyhub.config import FAVORITES_PATH, ensure_data_dir
from familyhub.models.soundscapes import Favorite

_lock = threading.Lock()


def _path() -> Path:
    ensure_data_dir()
    return FAVORITES_PATH


def load_favorites(path: Optional[Path] = None) -> List[Favorite]:
    """Load all favorites from disk."""
    p = path or _path()
    if not p.exists():
        return []
    try:
        data = json.loads(p.read_text())
    except (json.JSONDecodeError, OSError):
        return []
    out = []
    for item in data.get("favorites", []):
        try:
            out.append(
                Favorite(
                    favorite_id=item["favorite_id"],
                    mix_id=item["mix_id"],
                    family_id=item["family_id"],
                    child_id=item.get("child_id"),
                    created_at=item["created_at"],
                )
            )
        except (KeyError, TypeError):
            continue
    return out


def save_favorites(favorites: List[Favorite], path: Optional[Path] = None) -> None:
    """Save all favorites to disk."""
    p = path or _path()
    data = {
        "favorites": [
            {
                "favorite_id": f.favorite_id,
                "mix_id": f.mix_id,
                "family_id": f.family_id,
                "child_id": f.child_id,
                "created_at": f.created_at,
            }
            for f in favorites
        ]
    }
    p.write_text(json.dumps(data, indent=2))


def list_favorites(family_id: str, path: Optional[Path] = None) -> List[Favorite]:
    return [f for f in load_favorites(path) if f.family_id == family_id]


def toggle_favorite(
    mix_id: str,
    family_id: str,
    child_id: Optional[str] = None,
    path: Optional[Path] = None,
) -> dict:
    """Remove the family's favorite for mix_id if present, else add it.

    Returns {"favorited": bool} with the new state.
    """
    with _lock:
        favorites = load_favorites(path)
        for i, f in enumerate(favorites):
            if f.mix_id == mix_id and f.family_id == family_id:
                favorites.pop(i)
                save_favorites(favorites, path)
                return {"favorited": False}
        favorites.append(
            Favorite(
                favorite_id=str(uuid.uuid4()),
                mix_id=mix_id,
                family_id=family_id,
                child_id=child_id,
                created_at=datetime.now(timezone.utc).isoformat(),
            )
        )
        save_favorites(favorites, path)
        return {"favorited": True}
