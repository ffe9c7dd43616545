"""Shared utilities: UTC datetimes and id generation."""

from taskdesk.shared.utils.datetime import days_between, ensure_utc, utc_now
from taskdesk.shared.utils.generators import generate_cuid

__all__ = [
    "days_between",
    "ensure_utc",
    "generate_cuid",
    "utc_now",
]
