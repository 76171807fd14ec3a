"""
credkeep.report

Security audit over stored credentials: weak passwords, passwords that
have not been changed for a while, and passwords reused across accounts.
Produces a list of issues and an overall 0-100 security score.
"""

import calendar
import logging
import math
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from .strength import LABELS, STRONG, WEAK, estimate_strength

logger = logging.getLogger(__name__)

DEFAULT_STALE_MONTHS = 6
MAX_STALE_MONTHS = 1200

WEAK_PASSWORD = "weak_password"
OLD_PASSWORD = "old_password"
REUSED_PASSWORD = "reused_password"


def subtract_months(dt: datetime, months: int) -> datetime:
    """Go back `months` calendar months, clamping the day to the target month."""
    total = dt.year * 12 + (dt.month - 1) - months
    year, month = divmod(total, 12)
    month += 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value:
        try:
            # "Z" suffix is not accepted by fromisoformat before 3.11
            return datetime.fromisoformat(value.replace("Z", "+00:00")).replace(tzinfo=None)
        except ValueError:
            pass
    return None


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _updated_at(cred: Dict[str, Any]) -> Optional[datetime]:
    updated = _parse_timestamp(cred.get("last_updated"))
    if updated is None:
        logger.debug("Credential %r has no usable last_updated", cred.get("name"))
    return updated


# A record without a usable timestamp is neither stale nor recent.
def _is_stale(cred: Dict[str, Any], cutoff: datetime) -> bool:
    updated = _updated_at(cred)
    return updated is not None and updated < cutoff


def _is_recent(cred: Dict[str, Any], cutoff: datetime) -> bool:
    updated = _updated_at(cred)
    return updated is not None and updated >= cutoff


def _strength(cred: Dict[str, Any]) -> str:
    return estimate_strength(_text(cred.get("password")))["strength"]


def _group_by_password(credentials: Iterable[Dict[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
    groups: Dict[str, List[Dict[str, Any]]] = {}
    for cred in credentials:
        groups.setdefault(_text(cred.get("password")), []).append(cred)
    return groups


def find_issues(
    credentials: List[Dict[str, Any]],
    now: Optional[datetime] = None,
    stale_after_months: int = DEFAULT_STALE_MONTHS,
) -> List[Dict[str, Any]]:
    """
    Return issues in a stable order: per credential (weak, then old), then
    one reuse issue per shared password in first-seen order.
    """
    cutoff = subtract_months(now or datetime.now(), stale_after_months)
    issues: List[Dict[str, Any]] = []

    def add(credential_id, kind, severity, description, recommendation):
        issues.append({
            "id": len(issues) + 1,
            "credential_id": credential_id,
            "type": kind,
            "severity": severity,
            "description": description,
            "recommendation": recommendation,
        })

    for cred in credentials:
        name = _text(cred.get("name"))
        if _strength(cred) == WEAK:
            add(cred.get("id"), WEAK_PASSWORD, "high",
                f"Weak password detected for {name}",
                "Use a stronger password with a mix of uppercase, lowercase, numbers, and symbols.")
        if _is_stale(cred, cutoff):
            add(cred.get("id"), OLD_PASSWORD, "medium",
                f"Password for {name} hasn't been updated in over {stale_after_months} months",
                "Regularly update your passwords every 3-6 months for better security.")

    for group in _group_by_password(credentials).values():
        if len(group) > 1:
            names = ", ".join(_text(c.get("name")) for c in group)
            add(group[0].get("id"), REUSED_PASSWORD, "high",
                f"Password reused across multiple accounts: {names}",
                "Use unique passwords for each account to prevent security breaches from affecting multiple accounts.")

    return issues


def security_score(
    credentials: List[Dict[str, Any]],
    now: Optional[datetime] = None,
    stale_after_months: int = DEFAULT_STALE_MONTHS,
) -> int:
    """40% strong passwords, 40% unique passwords, 20% recently updated."""
    total = len(credentials)
    if not total:
        return 0
    cutoff = subtract_months(now or datetime.now(), stale_after_months)
    unique = len(_group_by_password(credentials))
    strong = sum(1 for c in credentials if _strength(c) == STRONG)
    recent = sum(1 for c in credentials if _is_recent(c, cutoff))
    # half-up rounding
    score = math.floor(strong / total * 40 + unique / total * 40 + recent / total * 20 + 0.5)
    return max(0, min(100, score))


def build_report(
    credentials: List[Dict[str, Any]],
    now: Optional[datetime] = None,
    stale_after_months: int = DEFAULT_STALE_MONTHS,
) -> Dict[str, Any]:
    now = now or datetime.now()
    by_strength = {label: 0 for label in LABELS}
    for cred in credentials:
        by_strength[_strength(cred)] += 1
    return {
        "score": security_score(credentials, now, stale_after_months),
        "total": len(credentials),
        "by_strength": by_strength,
        "issues": find_issues(credentials, now, stale_after_months),
    }
