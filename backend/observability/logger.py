"""
JSONL sink for turn decisions and metrics.

The gateway writes every LogEvent a turn produced here, tagged with the
session id, along with REQUEST_REJECTED lines and METRIC_TIMER events
from observability.metrics. One JSON object per line on stdout, so a
session can be replayed by filtering on session_id and decision.

ENABLE_JSON_LOGS=0 routes lines to a discard sink (see configure_logging).
"""

from __future__ import annotations

import json
import sys
from typing import Any, Mapping, Callable


# ------------------------------------------------------------------
# Explicit output sink (patchable in tests)
# ------------------------------------------------------------------

def _stdout_print(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


def _discard(line: str) -> None:
    del line


_print: Callable[[str], None] = _stdout_print


def configure_logging(*, enabled: bool) -> None:
    """Route log lines to stdout, or drop them when JSON logs are disabled."""
    global _print  # pylint: disable=global-statement
    _print = _stdout_print if enabled else _discard


def log_event(event: Mapping[str, Any]) -> None:
    """
    Serialize one event and hand it to the active sink.

    Unserializable payloads (for example a stray dataclass in details)
    become a LOGGER_SERIALIZATION_ERROR line instead. Never raises, so a
    bad log entry cannot fail a turn.
    """
    try:
        line = json.dumps(event, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        # Logging must never break a turn
        fallback: dict[str, Any] = {
            "ts_ms": event.get("ts_ms"),
            "event_type": "LOGGER_SERIALIZATION_ERROR",
            "error": str(e),
            "original_event_repr": repr(event),
        }
        line = json.dumps(fallback, ensure_ascii=False, separators=(",", ":"))

    _print(line)
