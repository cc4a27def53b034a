"""
Turn gateway.

Responsibilities:
- Decode one host request into a turn event
- Rebuild SessionState from the round-tripped attribute record
- Run the pure reducer
- Execute LogEvent commands via observability.logger
- Time each turn and encode the response

NOT responsible for:
- Any state machine logic
- Storing sessions between requests (the host round-trips the record)
- Resolving yes/no follow-ups
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Any

from game.reducer import reduce
from observability.logger import log_event
from observability.metrics import timed
from protocol.errors import ProtocolError
from protocol.requests import decode_request
from protocol.responses import encode_outcome
from session.attributes import from_attributes, to_attributes
from settings import DEFAULT_GAME_SETTINGS, GameSettings


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


# ------------------------------------------------------------------
# Gateway result
# ------------------------------------------------------------------

@dataclass(frozen=True)
class GatewayResult:
    """
    Return value for gateway boundary methods.

    response:
        JSON-ready body for the host (None when the request was rejected)

    error:
        Human-readable rejection reason
    """
    response: dict[str, Any] | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


# ------------------------------------------------------------------
# TurnGateway
# ------------------------------------------------------------------

class TurnGateway:
    """
    Stateless bridge between host requests and the reducer.

    One gateway serves every session; all per-session state travels in
    the request's attribute record.
    """

    def __init__(
        self,
        *,
        settings: GameSettings = DEFAULT_GAME_SETTINGS,
        rng: random.Random | None = None,
    ) -> None:
        self._settings = settings
        self._rng = rng or random.Random()

    def on_json_message(self, raw: str | bytes) -> GatewayResult:
        """Handle one host request end to end."""
        try:
            request = decode_request(raw)
            state = from_attributes(request.attributes)
        except ProtocolError as exc:
            log_event({
                "ts_ms": _now_ms(),
                "event_type": "REQUEST_REJECTED",
                "exception": type(exc).__name__,
                "message": str(exc),
            })
            return GatewayResult(error=str(exc))

        with timed(
            "turn_handling_ms",
            session_id=request.session_id,
            details={"event_type": request.event.event_type.value},
        ):
            new_state, outcome = reduce(
                state,
                request.event,
                rng=self._rng,
                settings=self._settings,
            )

        for entry in outcome.logs:
            log_event({"session_id": request.session_id, **entry.event})

        return GatewayResult(
            response=encode_outcome(outcome, to_attributes(new_state)),
        )
