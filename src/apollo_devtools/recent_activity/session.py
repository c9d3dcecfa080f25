"""
Recording sessions for recent activity.

A session owns the reference snapshot of one watched collection and the
events recorded for it while recording is on.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .models import RecentActivity
from .tracker import check_snapshot, get_recent_activities

logger = logging.getLogger(__name__)


class RecordingSession:
    """
    Continuous recording of changes in a single watched collection.

    Usage:
        session = RecordingSession("cache", max_events=500)
        session.start()
        session.record(first_snapshot)   # becomes the baseline
        session.record(next_snapshot)    # returns what changed
        session.stop()

    Ticks must be recorded in the order the snapshots were taken. A
    session is not safe to share between threads without external
    locking.
    """

    def __init__(self, name: str, max_events: Optional[int] = None):
        """
        Initialize recording session.

        Args:
            name: Name of the watched target (e.g. "cache")
            max_events: Maximum number of events kept (None for unbounded)
        """
        if max_events is not None and max_events < 1:
            raise ValueError("max_events must be at least 1")

        self.name = name
        self.max_events = max_events
        self.recording = False
        self.ticks = 0
        self._reference: List[Any] = []
        self._events: List[RecentActivity] = []

    @property
    def reference(self) -> List[Any]:
        """Copy of the current reference snapshot."""
        return list(self._reference)

    @property
    def events(self) -> List[RecentActivity]:
        """Copy of the events recorded so far, oldest first."""
        return list(self._events)

    def start(self, baseline: Optional[Iterable[Any]] = None) -> None:
        """
        Start recording.

        Args:
            baseline: Initial reference snapshot (default: empty, the
                first recorded snapshot becomes the baseline)
        """
        if self.recording:
            logger.warning(f"Session {self.name} is already recording")
            return

        self._reference = list(baseline) if baseline is not None else []
        self.recording = True
        self.ticks = 0
        logger.info(
            f"Started recording {self.name} "
            f"(baseline: {len(self._reference)} items)"
        )

    def record(self, snapshot: Sequence[Any]) -> Optional[List[RecentActivity]]:
        """
        Record one observation of the watched collection.

        Args:
            snapshot: Latest snapshot of the collection

        Returns:
            Events detected on this tick, or None if nothing could be
            compared (not recording, or no baseline yet)

        Raises:
            TypeError: If the snapshot is not a sequence of elements
        """
        if not self.recording:
            logger.debug(f"Ignoring snapshot for {self.name}: not recording")
            return None

        check_snapshot(snapshot)
        self.ticks += 1

        if not self._reference:
            self._reference = list(snapshot or [])
            logger.debug(
                f"Session {self.name} baseline set ({len(self._reference)} items)"
            )
            return None

        activities = get_recent_activities(snapshot, self._reference)
        if activities:
            self._events.extend(activities)
            self._trim()
            logger.debug(
                f"Session {self.name} tick {self.ticks}: {len(activities)} changes"
            )

        return activities

    def stop(self) -> None:
        """Stop recording and discard the reference snapshot."""
        if not self.recording:
            return

        self.recording = False
        self._reference = []
        logger.info(
            f"Stopped recording {self.name} ({len(self._events)} events recorded)"
        )

    def clear(self) -> None:
        """
        Drop recorded events.

        The reference snapshot is kept, so clearing while recording does
        not lose the changes of the next tick.
        """
        self._events = []
        logger.info(f"Cleared recent activity for {self.name}")

    def to_dict(self) -> Dict[str, Any]:
        """Session state for API responses."""
        return {
            "name": self.name,
            "recording": self.recording,
            "ticks": self.ticks,
            "reference_size": len(self._reference),
            "events": [event.model_dump(mode="json") for event in self._events],
        }

    def _trim(self) -> None:
        if self.max_events is not None and len(self._events) > self.max_events:
            dropped = len(self._events) - self.max_events
            del self._events[:dropped]
            logger.debug(f"Session {self.name}: dropped {dropped} oldest events")


class SessionRegistry:
    """
    Keeps one recording session per watched target.
    """

    def __init__(self, max_events: Optional[int] = None):
        """
        Initialize registry.

        Args:
            max_events: Event cap applied to sessions created by this registry
        """
        self.max_events = max_events
        self._sessions: Dict[str, RecordingSession] = {}

    def get(self, name: str) -> RecordingSession:
        """Get the session for a target, creating it on first use."""
        session = self._sessions.get(name)
        if session is None:
            session = RecordingSession(name, max_events=self.max_events)
            self._sessions[name] = session
            logger.debug(f"Created recording session {name}")
        return session

    def find(self, name: str) -> Optional[RecordingSession]:
        """Get an existing session, or None."""
        return self._sessions.get(name)

    def remove(self, name: str) -> bool:
        """Stop and forget a session. Returns True if it existed."""
        session = self._sessions.pop(name, None)
        if session is None:
            return False
        session.stop()
        return True

    def names(self) -> List[str]:
        return sorted(self._sessions)
