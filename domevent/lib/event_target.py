"""EventTarget: listener registry and the three-phase dispatch algorithm."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Callable

from domevent.constants import HANDLER_PREFIX
from domevent.lib.errors import IllegalMutation, InvalidArgument, UnsupportedHandler
from domevent.lib.event import Event
from domevent.lib.phase import EventPhase

logger = logging.getLogger(__name__)

Listener = Callable[[Event], object]


class EventTarget:
    """A node in a chain of event targets.

    Each target holds an optional parent, a fixed set of named handler slots
    (exposed as ``on<name>`` attributes) and two insertion-ordered listener
    lists per event type, one for the capturing phase and one for the bubbling
    phase. Attribute names starting with ``on`` are reserved for handler slots.

    Args:
        parent: The parent target, or None for a root. Cannot be changed later.
        handler_names: Names of the handler slots this target supports, e.g.
            ``["click", "load"]`` for ``onclick`` and ``onload``.
    """

    NONE = EventPhase.NONE
    CAPTURING_PHASE = EventPhase.CAPTURING_PHASE
    AT_TARGET = EventPhase.AT_TARGET
    BUBBLING_PHASE = EventPhase.BUBBLING_PHASE

    def __init__(
        self, parent: EventTarget | None = None, handler_names: Iterable[str] = ()
    ) -> None:
        if parent is not None and not isinstance(parent, EventTarget):
            raise InvalidArgument(
                f"EventTarget: parent must be None or an EventTarget, not {parent!r}"
            )
        if isinstance(handler_names, str) or not isinstance(handler_names, Iterable):
            raise InvalidArgument(
                f"EventTarget: handler_names must be a sequence of str, not {handler_names!r}"
            )

        handlers: dict[str, Listener | None] = {}
        for name in handler_names:
            if not isinstance(name, str):
                raise InvalidArgument(
                    f"EventTarget: handler_names must be a sequence of str, not {name!r}"
                )
            handlers[name] = None

        object.__setattr__(self, "_parent", parent)
        object.__setattr__(self, "_handlers", handlers)
        object.__setattr__(self, "_capture_listeners", {})
        object.__setattr__(self, "_bubble_listeners", {})

    @property
    def parent(self) -> EventTarget | None:
        return self._parent

    @parent.setter
    def parent(self, value) -> None:
        raise IllegalMutation("EventTarget: parent cannot be changed after construction")

    @property
    def handler_names(self) -> frozenset[str]:
        return frozenset(self._handlers)

    # Handler slots

    def get_handler(self, name: str) -> Listener | None:
        """Return the callback in the ``name`` handler slot, or None if unset."""
        if name not in self._handlers:
            raise UnsupportedHandler(
                f"{HANDLER_PREFIX}{name}: handler not supported by this target"
            )
        return self._handlers[name]

    def set_handler(self, name: str, handler: Listener | None) -> None:
        """Replace the callback in the ``name`` handler slot (None clears it)."""
        if name not in self._handlers:
            raise UnsupportedHandler(
                f"{HANDLER_PREFIX}{name}: handler not supported by this target"
            )
        if handler is not None and not callable(handler):
            raise UnsupportedHandler(
                f"{HANDLER_PREFIX}{name}: event handler can only be callable or None"
            )
        self._handlers[name] = handler

    def __getattr__(self, attr: str):
        # Only reached when normal lookup fails
        if attr.startswith(HANDLER_PREFIX) and len(attr) > len(HANDLER_PREFIX):
            return self.get_handler(attr[len(HANDLER_PREFIX) :])
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {attr!r}")

    def __setattr__(self, attr: str, value) -> None:
        if attr.startswith(HANDLER_PREFIX) and len(attr) > len(HANDLER_PREFIX):
            self.set_handler(attr[len(HANDLER_PREFIX) :], value)
            return
        super().__setattr__(attr, value)

    # Listener registry

    def _listeners_for(self, use_capture: bool) -> dict[str, list[Listener]]:
        return self._capture_listeners if use_capture else self._bubble_listeners

    def add_event_listener(self, name: str, listener: Listener, use_capture: bool = False) -> None:
        """Append ``listener`` to the capture or bubble list for ``name``.

        The same callable may be added more than once; it is then invoked once
        per registration.
        """
        _check_listener_args("add_event_listener", name, listener, use_capture)
        self._listeners_for(use_capture).setdefault(name, []).append(listener)
        logger.debug(
            f"Added {'capture' if use_capture else 'bubble'} listener for '{name}' on {self!r}"
        )

    def remove_event_listener(
        self, name: str, listener: Listener, use_capture: bool = False
    ) -> None:
        """Remove the first registration of ``listener``. No-op if it is not registered."""
        _check_listener_args("remove_event_listener", name, listener, use_capture)
        listeners = self._listeners_for(use_capture).get(name)
        if not listeners:
            return
        for i, registered in enumerate(listeners):
            if registered is listener:
                del listeners[i]
                logger.debug(
                    f"Removed {'capture' if use_capture else 'bubble'} listener for '{name}' "
                    f"on {self!r}"
                )
                return

    def listener_count(self, name: str, use_capture: bool | None = None) -> int:
        """Count listeners for ``name``; both phases when ``use_capture`` is None."""
        if use_capture is None:
            return len(self._capture_listeners.get(name, ())) + len(
                self._bubble_listeners.get(name, ())
            )
        return len(self._listeners_for(use_capture).get(name, ()))

    def has_listeners(self, name: str, use_capture: bool | None = None) -> bool:
        return self.listener_count(name, use_capture) > 0

    # Dispatch

    def dispatch_event(self, event: Event) -> bool:
        """Dispatch ``event`` with this target as its target.

        The event is captured down from the root ancestor, handled at this
        target, then bubbled back up to the root. Ancestors only take part when
        the event bubbles.

        Exceptions raised by listeners or handlers are not caught: they abort
        the dispatch and propagate to the caller.

        Returns:
            False if prevent_default() was called on a cancelable event,
            True otherwise.

        Raises:
            InvalidArgument: If ``event`` is not an Event with a type.
            IllegalMutation: If ``event`` is already being dispatched, or was
                was dispatched before.
        """
        if not isinstance(event, Event) or not event.type:
            raise InvalidArgument(f"dispatch_event(): event must be an Event, not {event!r}")
        if event.event_phase != EventPhase.NONE:
            raise IllegalMutation(f"dispatch_event(): {event!r} is already being dispatched")

        event._bind_target(self)
        logger.debug(f"Dispatching {event!r} on {self!r}")

        event._enter_phase(EventPhase.CAPTURING_PHASE)
        if event.bubbles and self._parent is not None:
            self._parent._capture(event)

        event._enter_phase(EventPhase.AT_TARGET)
        event._set_current_target(self)
        self._invoke_listeners(event, self._capture_listeners)
        self._invoke_handler(event)
        self._invoke_listeners(event, self._bubble_listeners)

        event._enter_phase(EventPhase.BUBBLING_PHASE)
        if event.bubbles and self._parent is not None:
            self._parent._bubble(event)

        event._reset()
        logger.debug(f"Finished dispatching {event!r}")
        return not event.default_prevented

    def _capture(self, event: Event) -> None:
        # Root first: walk up before running this target's capture listeners
        if event.bubbles and self._parent is not None:
            self._parent._capture(event)
        event._set_current_target(self)
        self._invoke_listeners(event, self._capture_listeners)

    def _bubble(self, event: Event) -> None:
        event._set_current_target(self)
        self._invoke_handler(event)
        self._invoke_listeners(event, self._bubble_listeners)
        if event.bubbles and self._parent is not None:
            self._parent._bubble(event)

    def _invoke_handler(self, event: Event) -> None:
        if event.propagation_stopped:
            return
        handler = self._handlers.get(event.type)
        if handler is not None:
            handler(event)

    def _invoke_listeners(self, event: Event, registry: dict[str, list[Listener]]) -> None:
        if event.propagation_stopped:
            return
        # Listeners added or removed while the loop runs take effect on the next loop
        for listener in tuple(registry.get(event.type, ())):
            if event.immediate_propagation_stopped:
                logger.debug(f"Immediate propagation stopped for {event!r} on {self!r}")
                break
            listener(event)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} at {id(self):#x}>"

    # DOM spellings
    addEventListener = add_event_listener
    removeEventListener = remove_event_listener
    dispatchEvent = dispatch_event


def _check_listener_args(method: str, name, listener, use_capture) -> None:
    if not isinstance(name, str):
        raise InvalidArgument(f"{method}(): name must be str, not {name!r}")
    if not callable(listener):
        raise InvalidArgument(f"{method}(): listener must be callable, not {listener!r}")
    if not isinstance(use_capture, bool):
        raise InvalidArgument(f"{method}(): use_capture must be bool, not {use_capture!r}")
