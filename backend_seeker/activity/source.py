"""
Paged source contract consumed by the collector.
"""

from __future__ import annotations

from typing import Protocol, Sequence

from backend_seeker.activity.models import Record


class PagedSource(Protocol):
    """
    Anything that returns the page of records older than a cursor.

    Pages are strictly newest-first; an empty page means history is exhausted.
    Any failure is raised; the collector does not inspect its type.
    """

    async def fetch(self, before: str | None = None) -> Sequence[Record]:
        ...
