"""Shared utilities: datetime and id generators."""

from nexus_obra.shared.utils.datetime import utc_now
from nexus_obra.shared.utils.generators import generate_cuid

__all__ = ["generate_cuid", "utc_now"]
