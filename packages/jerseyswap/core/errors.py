"""Error taxonomy for jersey swap workflows.

All errors raised by the core derive from JerseySwapError so callers can
catch the whole family in one place. Generation failures share the
GenerationError base: the workflow converts any of them into the ERROR state.
"""

from __future__ import annotations


class JerseySwapError(Exception):
    """Base exception for all jersey swap errors."""


class MalformedInputError(JerseySwapError, ValueError):
    """Input could not be interpreted (bad data URI, unsupported file)."""


class MissingInputError(JerseySwapError):
    """A required image is absent when composing a request."""


class InvalidTransitionError(JerseySwapError):
    """Workflow event is not allowed in the current state.

    Attributes:
        state: State the workflow was in when the event arrived.
        event: Name of the rejected event.
    """

    def __init__(self, state: str, event: str) -> None:
        self.state = state
        self.event = event
        super().__init__(f"Event '{event}' is not allowed in state '{state}'")


class GenerationError(JerseySwapError):
    """Base exception for failures talking to the generation service."""


class MissingCredentialError(GenerationError):
    """No service credential is configured."""


class NoImageReturnedError(GenerationError):
    """Service responded without any inline image content.

    Usually means the request was safety filtered or the response had an
    unexpected shape.
    """


class TransportError(GenerationError):
    """Network or service-level failure during a generation call.

    Attributes:
        cause: Original exception raised by the SDK or transport.
    """

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        base = super().__str__()
        if self.cause is None:
            return base
        return f"{base} ({type(self.cause).__name__}: {self.cause})"
