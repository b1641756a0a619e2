"""
Classification policy for upstream transaction types.

Fixed table, first match wins:

    SWAP            -> keep, swaps bucket
    UNKNOWN         -> rewrite to STAKE with STAKE_REWRITE_DESCRIPTION, stakes bucket
    STAKE, UNSTAKE  -> keep, stakes bucket
    anything else   -> exclude

Helius tags the Seeker SKR staking instruction as UNKNOWN; the rewrite restores
its meaning. Everything else (transfers, dust, airdrops) is dropped without a
log line or error.
"""

from __future__ import annotations

import dataclasses
from enum import Enum

from backend_seeker.activity.models import (
    STAKE_TYPES,
    TYPE_STAKE,
    TYPE_SWAP,
    TYPE_UNKNOWN,
    Record,
)

STAKE_REWRITE_DESCRIPTION = "质押SKR (Seeker专属底层交互)"


class Action(str, Enum):
    INCLUDE_AS_SWAP = "include-as-swap"
    INCLUDE_AS_STAKE = "include-as-stake"
    REWRITE_TO_STAKE = "rewrite-to-stake"
    EXCLUDE = "exclude"


def action_for(record_type: str) -> Action:
    """Total mapping from an upstream type tag to its Action."""
    if record_type == TYPE_SWAP:
        return Action.INCLUDE_AS_SWAP
    if record_type == TYPE_UNKNOWN:
        return Action.REWRITE_TO_STAKE
    if record_type in STAKE_TYPES:
        return Action.INCLUDE_AS_STAKE
    return Action.EXCLUDE


def classify(record: Record) -> Record | None:
    """
    Apply the policy to one record.

    Returns the record to keep (a rewritten copy for UNKNOWN, the same object
    otherwise) or None when the record is excluded.
    """
    action = action_for(record.type)
    if action is Action.EXCLUDE:
        return None
    if action is Action.REWRITE_TO_STAKE:
        return dataclasses.replace(
            record,
            type=TYPE_STAKE,
            description=STAKE_REWRITE_DESCRIPTION,
        )
    return record
