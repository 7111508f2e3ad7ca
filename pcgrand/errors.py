class PcgError(Exception):
    """Base class for every error raised by pcgrand."""


class SeedSizeError(PcgError, ValueError):
    """The seed buffer does not hold enough bytes for the next field."""


class WidthError(PcgError, ValueError):
    pass


class ExtensionSizeError(PcgError, ValueError):
    pass


class StreamNotSettableError(PcgError, TypeError):
    """set_stream() was called on a stream that cannot be changed."""


class UnsupportedOperationError(PcgError, TypeError):
    pass


class StateValidationError(PcgError, ValueError):
    """
    A serialized generator state failed validation.
    Records are rejected as-is, never repaired.
    """


class UnknownAlgorithmError(StateValidationError):
    pass
