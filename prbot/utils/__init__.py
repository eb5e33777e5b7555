"""
Utility package exports
"""

from prbot.utils.helpers import parse_member_list, time_ago

__all__ = ["parse_member_list", "time_ago"]
