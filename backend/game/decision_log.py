"""
LogEvent construction shared by the reducer and controllers.

Every decision the turn engine makes is described by one LogEvent with
the same required fields, so the JSONL stream can be filtered by
decision name regardless of which controller produced it.
"""

from __future__ import annotations

from typing import Any

from game.commands import LogEvent
from game.events import Event
from game.state_dataclass import SessionState


def log_decision(
    state: SessionState,
    event: Event,
    decision: str,
    details: dict[str, Any] | None = None,
) -> LogEvent:
    return LogEvent(
        event={
            "ts_ms": event.ts_ms,
            "request_id": event.request_id,
            "mode": state.mode.value,
            "phase": state.phase.value,
            "event_type": event.event_type.value,
            "decision": decision,
            "handler_id": state.current_handler_id,
            "button_count": state.button_count,
            "details": details or {},
        }
    )


def log_state_changed(
    old: SessionState,
    new: SessionState,
    event: Event,
    source: str,
) -> LogEvent:
    return log_decision(
        new,
        event,
        "state_changed",
        {
            "from_mode": old.mode.value,
            "to_mode": new.mode.value,
            "from_phase": old.phase.value,
            "to_phase": new.phase.value,
            "source": source,
        },
    )
