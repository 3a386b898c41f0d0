"""Data models for SwampDoge Sync."""

from swampdoge_sync.models.history import HistoryBuffer, normalize_series
from swampdoge_sync.models.holder import HolderEntry
from swampdoge_sync.models.picks import PicksSubmission
from swampdoge_sync.models.snapshot import (
    Balances,
    DataHealth,
    Prices,
    Snapshot,
    compute_valuation,
)

__all__ = [
    "Balances",
    "DataHealth",
    "HistoryBuffer",
    "HolderEntry",
    "PicksSubmission",
    "Prices",
    "Snapshot",
    "compute_valuation",
    "normalize_series",
]
