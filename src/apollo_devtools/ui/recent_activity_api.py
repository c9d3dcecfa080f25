"""
Recent activity API endpoints.

Lets the panel start, stop and clear recording for a watched target and
push snapshots of it.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, HTTPException
from pydantic import BaseModel

from ..core.config import get_config
from ..recent_activity.models import RecentActivity
from ..recent_activity.session import RecordingSession, SessionRegistry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recent", tags=["recent"])

registry = SessionRegistry(max_events=get_config().recorder.max_events)


class SessionState(BaseModel):
    """Recording state and accumulated events of one target."""

    name: str
    recording: bool
    ticks: int = 0
    reference_size: int = 0
    events: List[RecentActivity] = []


class TickResult(BaseModel):
    """Outcome of recording one snapshot."""

    name: str
    activities: Optional[List[RecentActivity]] = None


def _state(session: RecordingSession) -> SessionState:
    return SessionState(
        name=session.name,
        recording=session.recording,
        ticks=session.ticks,
        reference_size=len(session.reference),
        events=session.events,
    )


def _existing(target: str) -> RecordingSession:
    session = registry.find(target)
    if session is None:
        raise HTTPException(status_code=404, detail=f"No session for target {target}")
    return session


@router.get("", response_model=List[str])
async def list_targets() -> List[str]:
    """List targets that have a recording session."""
    return registry.names()


@router.get("/{target}", response_model=SessionState)
async def get_session(target: str) -> SessionState:
    """Get recording state and events for a target."""
    return _state(_existing(target))


@router.post("/{target}/start", response_model=SessionState)
async def start_recording(
    target: str,
    baseline: Optional[List[Any]] = Body(default=None),
) -> SessionState:
    """
    Start recording a target.

    Args:
        target: Name of the watched collection
        baseline: Optional initial snapshot

    Returns:
        Session state after starting
    """
    session = registry.get(target)
    session.start(baseline)
    return _state(session)


@router.post("/{target}/stop", response_model=SessionState)
async def stop_recording(target: str) -> SessionState:
    """Stop recording a target, keeping its events."""
    session = _existing(target)
    session.stop()
    return _state(session)


@router.post("/{target}/clear", response_model=SessionState)
async def clear_recording(target: str) -> SessionState:
    """Clear the events recorded for a target."""
    session = _existing(target)
    session.clear()
    return _state(session)


@router.post("/{target}/snapshot", response_model=TickResult)
async def record_snapshot(
    target: str,
    snapshot: List[Any] = Body(...),
) -> TickResult:
    """
    Record a snapshot of a target.

    Returns the changes detected on this tick, or null when there was
    nothing to compare yet.
    """
    session = _existing(target)
    if not session.recording:
        raise HTTPException(status_code=409, detail=f"Target {target} is not recording")

    activities = session.record(snapshot)
    return TickResult(name=target, activities=activities)


def reset_sessions() -> Dict[str, int]:
    """Forget all sessions. Used when the inspected client is reloaded."""
    names = registry.names()
    for name in names:
        registry.remove(name)
    logger.info(f"Reset {len(names)} recording sessions")
    return {"removed": len(names)}
