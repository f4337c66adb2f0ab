"""Error types for the terminal rendering core."""


class TerminalError(Exception):
    """Base class for terminal rendering errors."""
    pass


class NoTerminal(TerminalError):
    """Raised when the output stream is not an interactive terminal.
    
    Fatal at startup: the input loop must not run without a valid geometry.
    """
    pass


class RenderOverflow(TerminalError):
    """Raised when a layout cannot fit even after truncation."""
    pass


class InputDecodeAmbiguous(TerminalError):
    """Raised by strict decoding when an escape sequence is incomplete."""
    pass
