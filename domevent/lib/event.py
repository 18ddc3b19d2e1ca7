"""Event value object carrying the per-dispatch propagation state.

The descriptive fields (type, bubbles, cancelable, time stamp) are fixed at
construction. Phase, target and current target are written only by
EventTarget's dispatch algorithm, and the cancellation flags only through
prevent_default(), stop_propagation() and stop_immediate_propagation().
Every public attribute is read-only: assigning to one raises IllegalMutation.
"""

from __future__ import annotations

import time
from typing import Any, Mapping

from domevent.lib.errors import IllegalMutation, InvalidArgument
from domevent.lib.phase import EventPhase

EVENT_INIT_KEYS = ("bubbles", "cancelable")


def _read_only(attr: str, hint: str = "") -> property:
    """Build a property that exposes ``attr`` and rejects assignment."""
    public = attr.lstrip("_")

    def getter(self):
        return getattr(self, attr)

    def setter(self, value):
        message = f"Event: {public} is read-only"
        if hint:
            message += f" - use {hint}() instead"
        raise IllegalMutation(message)

    return property(getter, setter, doc=f"Read-only {public}.")


def _is_event_target(value: Any) -> bool:
    return callable(getattr(value, "dispatch_event", None))


class Event:
    """A synthetic DOM-style event.

    Args:
        type: Name of the event, e.g. ``"click"``.
        init: Optional ``EventInit``-style mapping with ``bubbles`` and/or
            ``cancelable`` keys.
        bubbles: Whether the event propagates through the parent chain.
        cancelable: Whether prevent_default() has any effect.

    Raises:
        InvalidArgument: If ``type`` is not a string, a flag is not a bool, or
            ``init`` is not a mapping of known keys.
    """

    NONE = EventPhase.NONE
    CAPTURING_PHASE = EventPhase.CAPTURING_PHASE
    AT_TARGET = EventPhase.AT_TARGET
    BUBBLING_PHASE = EventPhase.BUBBLING_PHASE

    def __init__(
        self,
        type: str,
        init: Mapping[str, bool] | None = None,
        *,
        bubbles: bool | None = None,
        cancelable: bool | None = None,
    ) -> None:
        if not isinstance(type, str):
            raise InvalidArgument(f"Event: type must be str, not {type!r}")

        options = _read_init(init)
        if bubbles is not None:
            options["bubbles"] = bubbles
        if cancelable is not None:
            options["cancelable"] = cancelable

        for key, value in options.items():
            if not isinstance(value, bool):
                raise InvalidArgument(f"Event: {key} must be bool, not {value!r}")

        self._type = type
        self._bubbles = options.get("bubbles", False)
        self._cancelable = options.get("cancelable", False)
        self._is_trusted = False
        self._time_stamp = time.time() * 1000

        self._event_phase = EventPhase.NONE
        self._target = None
        self._current_target = None
        self._default_prevented = False
        self._propagation_stopped = False
        self._immediate_propagation_stopped = False

    type = _read_only("_type")
    bubbles = _read_only("_bubbles")
    cancelable = _read_only("_cancelable")
    is_trusted = _read_only("_is_trusted")
    time_stamp = _read_only("_time_stamp")
    event_phase = _read_only("_event_phase")
    target = _read_only("_target")
    current_target = _read_only("_current_target")
    default_prevented = _read_only("_default_prevented", "prevent_default")
    propagation_stopped = _read_only("_propagation_stopped", "stop_propagation")
    immediate_propagation_stopped = _read_only(
        "_immediate_propagation_stopped", "stop_immediate_propagation"
    )
    # Legacy DOM spelling of propagation_stopped
    cancel_bubble = _read_only("_propagation_stopped", "stop_propagation")

    def prevent_default(self) -> None:
        """Mark the default action as cancelled. No-op unless cancelable."""
        if self._cancelable:
            self._default_prevented = True

    def stop_propagation(self) -> None:
        """Stop propagation once the currently running listener loop ends."""
        self._propagation_stopped = True

    def stop_immediate_propagation(self) -> None:
        """Stop propagation and skip the remaining listeners of the current loop."""
        self._propagation_stopped = True
        self._immediate_propagation_stopped = True

    # Dispatch-internal mutators, called by EventTarget only.

    def _enter_phase(self, phase: int) -> None:
        try:
            self._event_phase = EventPhase(phase)
        except ValueError:
            raise IllegalMutation(
                "Event: event_phase must be one of NONE, CAPTURING_PHASE, AT_TARGET, "
                f"BUBBLING_PHASE, not {phase!r}"
            ) from None

    def _bind_target(self, target: Any) -> None:
        if not _is_event_target(target):
            raise InvalidArgument(f"Event: target must implement EventTarget, not {target!r}")
        if self._target is not None:
            raise IllegalMutation("Event: target cannot be changed after it has been set")
        self._target = target

    def _set_current_target(self, target: Any) -> None:
        if target is not None and not _is_event_target(target):
            raise InvalidArgument(
                f"Event: current_target must implement EventTarget or be None, not {target!r}"
            )
        self._current_target = target

    def _reset(self) -> None:
        self._event_phase = EventPhase.NONE
        self._current_target = None

    def __repr__(self) -> str:
        flags = []
        if self._default_prevented:
            flags.append("default_prevented")
        if self._immediate_propagation_stopped:
            flags.append("immediate_propagation_stopped")
        elif self._propagation_stopped:
            flags.append("propagation_stopped")
        return (
            f"<Event type={self._type!r} phase={self._event_phase.name} "
            f"bubbles={self._bubbles} cancelable={self._cancelable}"
            + (f" {' '.join(flags)}" if flags else "")
            + ">"
        )

    # DOM spellings
    preventDefault = prevent_default
    stopPropagation = stop_propagation
    stopImmediatePropagation = stop_immediate_propagation
    isTrusted = is_trusted
    timeStamp = time_stamp
    eventPhase = event_phase
    currentTarget = current_target
    defaultPrevented = default_prevented
    propagationStopped = propagation_stopped
    immediatePropagationStopped = immediate_propagation_stopped
    cancelBubble = cancel_bubble


def _read_init(init: Mapping[str, bool] | None) -> dict[str, bool]:
    if init is None:
        return {}
    if not isinstance(init, Mapping):
        raise InvalidArgument(f"Event: init must be a mapping, not {init!r}")
    unknown = [key for key in init if key not in EVENT_INIT_KEYS]
    if unknown:
        raise InvalidArgument(f"Event: unsupported init keys: {', '.join(map(str, unknown))}")
    return dict(init)
