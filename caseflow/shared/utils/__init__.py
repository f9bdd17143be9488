"""Shared utilities: UTC datetime helpers and ID generation."""

from caseflow.shared.utils.datetime import ensure_utc, utc_after, utc_now
from caseflow.shared.utils.generators import generate_cuid

__all__ = ["ensure_utc", "generate_cuid", "utc_after", "utc_now"]
