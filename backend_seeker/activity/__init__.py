"""
Daily activity pipeline: pagination, UTC+8 day boundary, classification.
"""

from backend_seeker.activity.clock import Clock, FixedClock, SystemClock, start_of_day_cutoff
from backend_seeker.activity.collector import ActivityCollector, CollectorConfig, collect
from backend_seeker.activity.models import Record, ResultBundle
from backend_seeker.activity.policy import STAKE_REWRITE_DESCRIPTION, Action, classify
from backend_seeker.activity.source import PagedSource

__all__ = [
    "Action",
    "ActivityCollector",
    "Clock",
    "CollectorConfig",
    "FixedClock",
    "PagedSource",
    "Record",
    "ResultBundle",
    "STAKE_REWRITE_DESCRIPTION",
    "SystemClock",
    "classify",
    "collect",
    "start_of_day_cutoff",
]
