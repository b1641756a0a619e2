"""
Data models for the daily activity feed.

Record mirrors one element of the Helius enhanced transactions response;
ResultBundle is the collector's complete output for one request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

TYPE_SWAP = "SWAP"
TYPE_UNKNOWN = "UNKNOWN"
TYPE_STAKE = "STAKE"
TYPE_UNSTAKE = "UNSTAKE"

STAKE_TYPES = frozenset({TYPE_STAKE, TYPE_UNSTAKE})


@dataclass(frozen=True)
class Record:
    """
    One upstream transaction entry.

    Frozen: reclassification builds a new Record via dataclasses.replace, so the
    value returned by the source is never modified.
    """

    signature: str
    timestamp: int  # Unix seconds, upstream-assigned
    type: str
    description: str = ""

    @classmethod
    def from_helius_item(cls, item: Any) -> "Record":
        """
        Build from a single Helius /v0/addresses/{address}/transactions item.

        Raises ValueError when the item is not an object or lacks a usable
        signature or timestamp.
        """
        if not isinstance(item, dict):
            raise ValueError(f"transaction item must be an object, got {type(item).__name__}")
        signature = item.get("signature")
        if not isinstance(signature, str) or not signature:
            raise ValueError("transaction item has no signature")
        raw_ts = item.get("timestamp")
        if isinstance(raw_ts, bool) or not isinstance(raw_ts, (int, float)):
            raise ValueError(f"transaction {signature[:16]} has no numeric timestamp")
        return cls(
            signature=signature,
            timestamp=int(raw_ts),
            type=str(item.get("type") or ""),
            description=str(item.get("description") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "signature": self.signature,
            "timestamp": self.timestamp,
            "description": self.description,
            "type": self.type,
        }


@dataclass(frozen=True)
class ResultBundle:
    """
    Today's swaps and stakes for one address, newest first.

    total is derived, so total == len(swaps) + len(stakes) always holds.
    """

    swaps: tuple[Record, ...] = ()
    stakes: tuple[Record, ...] = ()
    total: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "total", len(self.swaps) + len(self.stakes))

    @classmethod
    def partition(cls, records: Iterable[Record]) -> "ResultBundle":
        """Split accepted records into swaps and stakes, keeping their order."""
        swaps: list[Record] = []
        stakes: list[Record] = []
        for record in records:
            if record.type == TYPE_SWAP:
                swaps.append(record)
            elif record.type in STAKE_TYPES:
                stakes.append(record)
        return cls(swaps=tuple(swaps), stakes=tuple(stakes))

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON payload the dashboard renders."""
        return {
            "total": self.total,
            "swaps": [r.to_dict() for r in self.swaps],
            "stakes": [r.to_dict() for r in self.stakes],
        }
