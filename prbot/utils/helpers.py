"""
Shared Utility Functions

Common helper functions used across multiple modules.
"""

from datetime import datetime, timezone
from typing import Any, List, Optional


def parse_member_list(value: Any) -> List[str]:
    """
    Parse a member or team list into a clean list of strings.

    Handles various formats:
    - Comma-separated string: "alice, bob" → ["alice", "bob"]
    - List: ["alice", " bob "] → ["alice", "bob"]
    - None/empty: None → []

    Blank entries are dropped; order is preserved.
    """
    if not value:
        return []

    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple, set)):
        items = [str(item) for item in value if item is not None]
    else:
        items = [str(value)]

    return [item.strip() for item in items if item.strip()]


def time_ago(created_at: datetime, now: Optional[datetime] = None) -> str:
    """
    Render a relative age such as "3d ago", "5h ago" or "just now".

    Naive datetimes are treated as UTC.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    hours = int((now - created_at).total_seconds() // 3600)
    days = hours // 24

    if days > 0:
        return f"{days}d ago"
    if hours > 0:
        return f"{hours}h ago"
    return "just now"
