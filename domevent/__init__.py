from domevent.constants import AT_TARGET, BUBBLING_PHASE, CAPTURING_PHASE, NONE
from domevent.lib.errors import EventError, IllegalMutation, InvalidArgument, UnsupportedHandler
from domevent.lib.event import Event
from domevent.lib.event_target import EventTarget
from domevent.lib.phase import EventPhase
from domevent.version import __version__

PACKAGE = __package__
VERSION = __version__

__all__ = [
    "VERSION",
    "PACKAGE",
    "NONE",
    "CAPTURING_PHASE",
    "AT_TARGET",
    "BUBBLING_PHASE",
    Event.__name__,
    EventPhase.__name__,
    EventTarget.__name__,
    EventError.__name__,
    IllegalMutation.__name__,
    InvalidArgument.__name__,
    UnsupportedHandler.__name__,
]
