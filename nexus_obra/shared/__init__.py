"""Shared utilities used by every layer. No business logic."""

from nexus_obra.shared.utils import generate_cuid, utc_now

__all__ = ["generate_cuid", "utc_now"]
