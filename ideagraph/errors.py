"""
Error taxonomy for idea generation.

Only total failures abort a generation: a missing credential, a failed call to
the model endpoint, or a reply with no usable text. Formatting drift inside a
reply is recovered line by line by the parser and never raises.
"""

from typing import Optional


class IdeaGenerationError(Exception):
    """Base class for failures surfaced by the idea generation pipeline."""


class ConfigurationError(IdeaGenerationError):
    """A required setting (the model API key) is missing."""


class UpstreamError(IdeaGenerationError):
    """The model endpoint answered with a non-success status or could not be reached."""

    def __init__(self, status_code: Optional[int], body: str = "", reason: str = ""):
        self.status_code = status_code
        self.body = body
        self.reason = reason
        if status_code is None:
            message = f"Model endpoint unreachable: {body or reason}"
        else:
            message = f"Model endpoint error {status_code} {reason}".rstrip() + f": {body}"
        super().__init__(message)


class EmptyContentError(IdeaGenerationError):
    """The model answered successfully but the reply holds no ideas."""
