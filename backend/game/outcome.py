"""
Per-turn response value.

Every controller returns exactly one TurnOutcome, which the host hands to
the response layer. Outcomes are assembled with the small builder below
so controllers never touch shared scratch state.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from game.commands import Command, LogEvent


@dataclass(frozen=True)
class TurnOutcome:
    """
    Prompts, device commands and microphone state for one turn.

    logs are executed by the host and never sent to the device.
    """
    speech: tuple[str, ...] = ()
    reprompt: tuple[str, ...] = ()
    directives: tuple[Command, ...] = ()
    open_microphone: bool = False
    logs: tuple[LogEvent, ...] = ()


@dataclass
class OutcomeBuilder:
    """Mutable accumulator local to a single handler call."""
    speech: list[str] = field(default_factory=list)
    reprompt: list[str] = field(default_factory=list)
    directives: list[Command] = field(default_factory=list)
    logs: list[LogEvent] = field(default_factory=list)
    open_microphone: bool = False

    def say(self, *fragments: str) -> OutcomeBuilder:
        self.speech.extend(fragments)
        return self

    def reprompt_with(self, *fragments: str) -> OutcomeBuilder:
        self.reprompt.extend(fragments)
        return self

    def emit(self, *commands: Command) -> OutcomeBuilder:
        self.directives.extend(commands)
        return self

    def log(self, *entries: LogEvent) -> OutcomeBuilder:
        self.logs.extend(entries)
        return self

    def build(self) -> TurnOutcome:
        return TurnOutcome(
            speech=tuple(self.speech),
            reprompt=tuple(self.reprompt),
            directives=tuple(self.directives),
            open_microphone=self.open_microphone,
            logs=_logs_last(tuple(self.logs)),
        )


def _logs_last(logs: tuple[LogEvent, ...]) -> tuple[LogEvent, ...]:
    """Keep emission order but move state_changed entries to the end."""
    others = [entry for entry in logs if entry.event.get("decision") != "state_changed"]
    changes = [entry for entry in logs if entry.event.get("decision") == "state_changed"]
    return tuple(others + changes)
