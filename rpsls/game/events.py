from enum import Enum, auto


class GameEvent(int, Enum):
    GESTURE = 1
    RANDOM_NUMBER = 2
    RESET = 3


class ServerEvent(int, Enum):
    ERROR = auto()
    ACK = auto()
    STATE = auto()
    PONG = auto()
