"""Record the order in which listeners and handlers run during dispatch."""

from __future__ import annotations

import logging
from typing import Callable, NamedTuple

from domevent.lib.event import Event
from domevent.lib.event_target import EventTarget
from domevent.lib.phase import EventPhase

logger = logging.getLogger(__name__)

CAPTURE = "capture"
HANDLER = "handler"
BUBBLE = "bubble"


class TraceEntry(NamedTuple):
    target: str
    kind: str
    phase: EventPhase

    def __str__(self) -> str:
        return f"{self.target:<12} {self.kind:<8} {self.phase.name}"


class DispatchTracer:
    """Installs recording callbacks on named targets and collects their calls.

    Each recording callback appends a TraceEntry and then runs the optional
    ``action`` for its target, which is how a trace can stop propagation or
    prevent the default action at a chosen point.
    """

    def __init__(self) -> None:
        self.entries: list[TraceEntry] = []
        self._actions: dict[str, Callable[[Event], object]] = {}

    def set_action(self, name: str, action: Callable[[Event], object]) -> None:
        """Run ``action`` after every recorded call on the target called ``name``."""
        self._actions[name] = action

    def recorder(self, name: str, kind: str) -> Callable[[Event], None]:
        def record(event: Event) -> None:
            entry = TraceEntry(name, kind, event.event_phase)
            logger.debug(f"Trace: {entry}")
            self.entries.append(entry)
            action = self._actions.get(name)
            if action is not None:
                action(event)

        return record

    def watch(
        self,
        name: str,
        target: EventTarget,
        event_type: str,
        capture: bool = True,
        bubble: bool = True,
    ) -> None:
        """Record capture listeners, bubble listeners and the handler slot on ``target``."""
        if capture:
            target.add_event_listener(event_type, self.recorder(name, CAPTURE), True)
        if event_type in target.handler_names:
            target.set_handler(event_type, self.recorder(name, HANDLER))
        if bubble:
            target.add_event_listener(event_type, self.recorder(name, BUBBLE))

    def clear(self) -> None:
        self.entries.clear()

    def format(self) -> str:
        return "\n".join(str(entry) for entry in self.entries)
