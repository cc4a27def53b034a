# pylint: disable=missing-module-docstring,missing-function-docstring
import pytest

from game.animations import solid
from game.commands import LogEvent, SetIdlePattern
from game.outcome import TurnOutcome
from protocol.responses import encode_directive, encode_outcome


def test_light_directive_encoding():
    encoded = encode_directive(SetIdlePattern(targets=("A",), pattern=solid(1, "red", 500)))

    assert encoded == {
        "type": "SET_IDLE_PATTERN",
        "targetGadgets": ["A"],
        "animations": [
            {
                "repeat": 1,
                "targetLights": ["1"],
                "sequence": [{"durationMs": 500, "color": "FF0000", "blend": False}],
            }
        ],
    }


def test_log_events_are_not_device_commands():
    with pytest.raises(TypeError):
        encode_directive(LogEvent(event={}))


def test_outcome_joins_fragments():
    outcome = TurnOutcome(
        speech=("Hello.", "Pick a color."),
        reprompt=("Red or blue?",),
        open_microphone=True,
    )

    body = encode_outcome(outcome, {"state": "PLAY_MODE"})

    assert body["speech"] == "Hello. Pick a color."
    assert body["reprompt"] == "Red or blue?"
    assert body["directives"] == []
    assert body["open_microphone"] is True
    assert body["session_attributes"] == {"state": "PLAY_MODE"}


def test_fragments_with_trailing_spaces_join_with_single_spaces():
    outcome = TurnOutcome(
        speech=("Ok. red it is. ", "Try to press your button. ", "", "<wait/>"),
    )

    body = encode_outcome(outcome, {})

    assert body["speech"] == "Ok. red it is. Try to press your button. <wait/>"
    assert body["reprompt"] is None
