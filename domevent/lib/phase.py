import enum

from domevent import constants


class EventPhase(enum.IntEnum):
    NONE = constants.NONE
    CAPTURING_PHASE = constants.CAPTURING_PHASE
    AT_TARGET = constants.AT_TARGET
    BUBBLING_PHASE = constants.BUBBLING_PHASE
