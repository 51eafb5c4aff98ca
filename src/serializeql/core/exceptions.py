"""Exceptions raised while deriving a serialization key."""


class SerializeError(Exception):
    """Base class for all serializeql errors."""

    pass


class InvalidDocumentError(SerializeError, ValueError):
    """Raised when a query document is not a single executable operation."""

    pass


class KeyExtractionError(SerializeError, ValueError):
    """Raised when the @serialize directive cannot be turned into a key."""

    pass


class MissingKeyArgumentError(KeyExtractionError):
    """Raised when the @serialize directive has no 'key' argument."""

    def __init__(self, directive_name: str, argument_name: str = "key") -> None:
        self.directive_name = directive_name
        self.argument_name = argument_name
        super().__init__(
            f"The @{directive_name} directive requires a '{argument_name}' argument"
        )


class InvalidKeyArgumentTypeError(KeyExtractionError):
    """Raised when the 'key' argument is not a list value."""

    def __init__(self, directive_name: str, kind: str, argument_name: str = "key") -> None:
        self.directive_name = directive_name
        self.argument_name = argument_name
        self.kind = kind
        super().__init__(
            f"The @{directive_name} directive's '{argument_name}' argument "
            f"must be of type List, got {kind}"
        )


class MissingVariableError(KeyExtractionError):
    """Raised when a key references a variable that was not supplied."""

    def __init__(self, name: str, directive_name: str = "serialize") -> None:
        self.name = name
        self.directive_name = directive_name
        super().__init__(
            f"No value supplied for variable ${name} used in @{directive_name} key"
        )


class InvalidKeyValueError(KeyExtractionError):
    """Raised when the materialized key values cannot be encoded as JSON."""

    def __init__(self, reason: str, directive_name: str = "serialize") -> None:
        self.directive_name = directive_name
        super().__init__(f"Failed to encode @{directive_name} key: {reason}")


class UnsupportedArgumentKindError(KeyExtractionError):
    """Raised when a key list element is not a scalar literal or variable."""

    def __init__(self, kind: str, directive_name: str = "serialize") -> None:
        self.kind = kind
        self.directive_name = directive_name
        super().__init__(
            f"Argument of type {kind} is not allowed in @{directive_name} directive"
        )
