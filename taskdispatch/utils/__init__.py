"""
Shared utilities for taskdispatch.

Common functionality used across contexts:
- Logging setup
- Text tokenization
- Timestamp handling
- Report formatting
"""

from taskdispatch.utils.timestamp import hours_between, parse_timestamp, utc_now

__all__ = ["hours_between", "parse_timestamp", "utc_now"]
