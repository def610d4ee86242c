"""
Engine Errors - Contract violations raised by transitions.

Every error here is a hard failure: a well-behaved driver gates its
affordances with the same predicates the engine exposes, so none of
these are expected in normal play and none are retried.
"""


class EngineError(Exception):
    """Base class for all engine errors."""


class ValidationError(EngineError, ValueError):
    """Malformed payload: unknown player, out-of-range index or number."""


class PreconditionError(EngineError, RuntimeError):
    """Action invoked in the wrong phase or before a required fact exists."""


class MissingChoiceError(EngineError):
    """A card that needs an extra choice was executed without one."""
