"""Error taxonomy for screenkit.

Every failure coming out of a collaborator (screen provider, matching
engine, OCR engine, data sink, input backend) is translated into one of
these kinds and raised to the caller. Nothing here is retried.
"""

from typing import Optional


class ScreenkitError(Exception):
    """Base class for all screenkit errors."""
    pass


class NoMatchFound(ScreenkitError):
    """No candidate cleared the requested confidence threshold."""

    def __init__(
        self,
        min_confidence: float,
        best_confidence: Optional[float] = None,
    ):
        self.min_confidence = min_confidence
        self.best_confidence = best_confidence
        if best_confidence is None:
            message = f"No match found (required confidence {min_confidence:.2f})"
        else:
            message = (
                f"No match found: best candidate {best_confidence:.3f} "
                f"below required confidence {min_confidence:.2f}"
            )
        super().__init__(message)


class EngineFailure(ScreenkitError):
    """The matching engine faulted (bad input, internal error)."""
    pass


class OcrFailure(ScreenkitError):
    """The OCR engine reported an error for a submitted job."""
    pass


class SinkWriteFailure(ScreenkitError):
    """An image could not be written to its destination."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"Failed to write image to {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class NativeActionFailure(ScreenkitError):
    """A mouse, keyboard or clipboard action could not be performed."""
    pass
