"""
Typed failures raised by the synthesis engine and its collaborators.

Library code raises these; only the CLI catches and reports them.
"""


class WavGenError(Exception):
    """Base class for every wavgen failure."""


class InvalidParameterError(WavGenError, ValueError):
    """Raised for an unsupported waveform parameter or malformed signal spec."""


class MissingTaperError(WavGenError):
    """Raised when a waveform that requires a trailing fade has no taper."""


class NumericalDegeneracyError(WavGenError, ValueError):
    """Raised when a parameter makes the math undefined (e.g. log of zero)."""


class TaperError(WavGenError, ValueError):
    """Raised when a taper window cannot be applied to a buffer."""


class WavFileError(WavGenError):
    """Raised for bad WAV file names, missing files or unreadable containers."""


class ConcatError(WavGenError):
    """Raised for malformed `cat` commands or incompatible input files."""
