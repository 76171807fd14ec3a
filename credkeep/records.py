"""
credkeep.records
Plain-dict credential records as handed to storage.
"""

from typing import Any, Dict, Optional

from .strength import LABELS, MEDIUM, estimate_strength

DEFAULT_CATEGORY = "Imported"


def make_credential(
    name: str,
    username: str = "",
    password: str = "",
    category: str = DEFAULT_CATEGORY,
    notes: Optional[str] = None,
    strength: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build a new credential record. `strength` is derived from the password
    unless an explicit label is passed; `notes=None` leaves the key out.
    """
    record: Dict[str, Any] = {
        "name": name,
        "username": username,
        "password": password,
        "category": category,
        "strength": normalize_strength(strength) if strength else estimate_strength(password)["strength"],
        "favorite": False,
    }
    if notes is not None:
        record["notes"] = notes
    return record


def normalize_strength(value: Any) -> str:
    return value if value in LABELS else MEDIUM


def refresh_strength(record: Dict[str, Any]) -> Dict[str, Any]:
    updated = dict(record)
    updated["strength"] = estimate_strength(updated.get("password") or "")["strength"]
    return updated
