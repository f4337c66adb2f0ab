"""Key tokens and decoding of raw terminal input."""

from enum import Enum

from common.logging_setup import get_logger
from terminal.errors import InputDecodeAmbiguous

logger = get_logger(__name__)


ESC = "\x1b"


class Key(Enum):
    """Navigation tokens the dashboard reacts to."""
    
    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    QUIT = "quit"
    OTHER = "other"


# Complete escape sequences, both normal (CSI) and application cursor mode (SS3)
ESCAPE_SEQUENCES = {
    ESC + "[A": Key.UP,
    ESC + "[B": Key.DOWN,
    ESC + "OA": Key.UP,
    ESC + "OB": Key.DOWN,
}

# Longest escape sequence we try to read after an ESC
ESCAPE_SEQUENCE_LENGTH = 3

# Characters that can follow ESC in a sequence we decode
ESCAPE_INTRODUCERS = ("[", "O")


def decode_key_strict(raw: str) -> Key:
    """
    Decode one keystroke worth of raw input.
    
    Args:
        raw: Characters read for a single keystroke
        
    Returns:
        Decoded key
        
    Raises:
        InputDecodeAmbiguous: If ``raw`` is a truncated escape sequence
    """
    if raw in ("", "\r", "\n"):
        return Key.ENTER
    if raw == "q":
        return Key.QUIT
    if raw.startswith(ESC):
        key = ESCAPE_SEQUENCES.get(raw[:ESCAPE_SEQUENCE_LENGTH])
        if key is not None:
            return key
        if len(raw) < ESCAPE_SEQUENCE_LENGTH:
            raise InputDecodeAmbiguous(f"Incomplete escape sequence {raw!r}")
    return Key.OTHER


def decode_key(raw: str) -> Key:
    """Decode raw input, mapping ambiguous sequences to ``Key.OTHER``."""
    try:
        return decode_key_strict(raw)
    except InputDecodeAmbiguous as e:
        logger.debug(f"Discarding input: {e}")
        return Key.OTHER
