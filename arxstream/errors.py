"""
Cipher Errors

Every error raised by the library derives from ARXStreamError, which is a
ValueError so callers that already treat bad cipher input as ValueError keep
working.
"""


class ARXStreamError(ValueError):
    """Base class for all cipher contract violations."""


class KeySizeError(ARXStreamError):
    """The supplied key does not have the size the variant requires."""


class NonceSizeError(ARXStreamError):
    """The supplied nonce does not have the size the variant requires."""


class UnsupportedSizeError(ARXStreamError):
    """A declared key or nonce width is not supported by the variant."""


class BufferLengthError(ARXStreamError):
    """Input, output and requested lengths do not agree."""


class BlockCountError(ARXStreamError):
    """A block count is negative, not an integer, or too large to process."""


class KeystreamExhaustedError(ARXStreamError):
    """
    The request would wrap the block counter.

    Wrapping repeats keystream under the same key and nonce, so it is refused
    instead of silently starting over at block zero.
    """


class ContextStateError(ARXStreamError):
    """The context has not been set up (or has been wiped)."""


class UnknownVariantError(ARXStreamError):
    """No cipher variant is registered under the requested name."""
