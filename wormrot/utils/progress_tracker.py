"""
Progress tracking for wormrot runs.
Records the state machine position of a run and the status of each item.
"""

import time
from typing import Dict, List, Optional, Callable
from dataclasses import dataclass, field
from enum import Enum


class TransferStatus(Enum):
    """Status of a single item."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class RunState(Enum):
    """Position of a run in the sender or receiver state machine."""
    IDLE = "idle"
    ANNOUNCING_COUNT = "announcing_count"
    AWAITING_COUNT = "awaiting_count"
    SENDING_METADATA = "sending_metadata"
    SENDING_DATA = "sending_data"
    AWAITING_METADATA = "awaiting_metadata"
    AWAITING_DATA = "awaiting_data"
    VERIFYING = "verifying"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ItemProgress:
    """Progress information for one item."""
    index: int
    name: str
    status: TransferStatus = TransferStatus.PENDING
    stored_as: Optional[str] = None
    start_time: Optional[float] = None
    end_time: Optional[float] = None
    error: Optional[str] = None

    @property
    def duration(self) -> Optional[float]:
        if self.start_time is None or self.end_time is None:
            return None
        return self.end_time - self.start_time


@dataclass
class RunProgress:
    """Progress of a whole run."""
    role: str
    state: RunState = RunState.IDLE
    total: Optional[int] = None
    items: Dict[int, ItemProgress] = field(default_factory=dict)
    history: List[RunState] = field(default_factory=lambda: [RunState.IDLE])

    @property
    def completed_items(self) -> int:
        return sum(1 for item in self.items.values() if item.status == TransferStatus.COMPLETED)

    @property
    def is_done(self) -> bool:
        return self.state == RunState.DONE


class ProgressTracker:
    """Tracks the state of one run and notifies listeners on every change."""

    def __init__(self, role: str):
        """
        Initialize progress tracker.

        Args:
            role: "send" or "receive"
        """
        self.progress = RunProgress(role=role)
        self.progress_callbacks: List[Callable[[RunProgress], None]] = []

    def add_progress_callback(self, callback: Callable[[RunProgress], None]):
        """Add a callback function to be called on progress updates."""
        self.progress_callbacks.append(callback)

    def _notify_progress_callbacks(self):
        for callback in self.progress_callbacks:
            callback(self.progress)

    def set_state(self, state: RunState):
        self.progress.state = state
        self.progress.history.append(state)
        self._notify_progress_callbacks()

    def set_total(self, total: int):
        self.progress.total = total
        self._notify_progress_callbacks()

    def start_item(self, index: int, name: str) -> ItemProgress:
        item = ItemProgress(index=index, name=name, status=TransferStatus.IN_PROGRESS,
                            start_time=time.time())
        self.progress.items[index] = item
        self._notify_progress_callbacks()
        return item

    def complete_item(self, index: int, stored_as: Optional[str] = None):
        item = self.progress.items[index]
        item.status = TransferStatus.COMPLETED
        item.stored_as = stored_as
        item.end_time = time.time()
        self._notify_progress_callbacks()

    def fail(self, error: str, index: Optional[int] = None):
        """Mark the run, and the item in flight if any, as failed."""
        if index is not None and index in self.progress.items:
            item = self.progress.items[index]
            item.status = TransferStatus.FAILED
            item.error = error
            item.end_time = time.time()
        self.set_state(RunState.FAILED)
