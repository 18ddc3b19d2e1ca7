import logging

# Phase values, mirrored by domevent.lib.phase.EventPhase
NONE = 0
CAPTURING_PHASE = 1
AT_TARGET = 2
BUBBLING_PHASE = 3

# Handler slots are exposed as attributes named "on" + handler name
HANDLER_PREFIX = "on"

DEFAULT_EVENT_TYPE = "click"
DEFAULT_LOG_LEVEL = logging.WARNING
DEFAULT_MAX_LOG_FILES = 5

LOG_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}
