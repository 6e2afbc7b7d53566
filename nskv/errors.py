"""nskv error types."""


class StorageError(Exception):
    """Base class for failures reading or writing typed data."""


class PreconditionViolation(ValueError):
    """Raised when a caller breaks an encoding precondition.

    A namespace segment longer than 255 bytes, or an empty namespace
    chain. Never retried; fix the caller.
    """


class NotFound(StorageError, KeyError):
    """Raised by ``load``-style calls when no value exists at the key.

    Attributes:
        kind: Name of the expected value type.
        key: The (unprefixed) key that was looked up.
    """

    def __init__(self, kind: str, key: bytes | None = None) -> None:
        self.kind = kind
        self.key = key
        msg = f"{kind} not found"
        if key is not None:
            msg += f" at key {key!r}"
        super().__init__(msg)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class SerializeError(StorageError):
    """Raised when a value cannot be encoded to bytes.

    Attributes:
        kind: Name of the codec's value type.
    """

    def __init__(self, kind: str, msg: str) -> None:
        self.kind = kind
        super().__init__(f"Error serializing {kind}: {msg}")


class DeserializeError(StorageError):
    """Raised when stored bytes do not parse as the expected type.

    Corruption is never reported as absence. The decoder's
    exception is chained as ``__cause__``.

    Attributes:
        kind: Name of the codec's value type.
    """

    def __init__(self, kind: str, msg: str) -> None:
        self.kind = kind
        super().__init__(f"Error parsing {kind}: {msg}")
