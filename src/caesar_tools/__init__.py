from .cipher import (
    Direction,
    InvalidShift,
    RotationCipher,
    caesar_shift,
    rot13,
)
from .config import ToolConfig, load_config, save_config
from .cracker import CrackResult, brute_force, crack, english_score
from .history import log_event, read_events

__all__ = [
    "Direction",
    "InvalidShift",
    "RotationCipher",
    "caesar_shift",
    "rot13",
    "ToolConfig",
    "load_config",
    "save_config",
    "CrackResult",
    "brute_force",
    "crack",
    "english_score",
    "log_event",
    "read_events",
]
