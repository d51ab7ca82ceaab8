"""Errors raised while preparing or interpreting a user import."""


class UserImportError(ValueError):
    """Base class for all errors raised by the bulk import subsystem."""


class RecordValidationError(UserImportError):
    """An import record or provider link was built from malformed input."""


class HashConfigValidationError(UserImportError):
    """A hash algorithm configuration was built from malformed input."""


class BatchValidationError(UserImportError):
    """A batch was rejected before being sent to the identity service."""


class InvalidBatchError(BatchValidationError):
    """The batch is not a sequence of records."""


class EmptyBatchError(BatchValidationError):
    """The batch contains no records."""


class BatchTooLargeError(BatchValidationError):
    """The batch contains more records than the service accepts at once."""


class InvalidRecordError(BatchValidationError):
    """An element of the batch is not an ImportRecord."""

    def __init__(self, index: int, found: type) -> None:
        """Initializes a new instance of InvalidRecordError."""
        self.index = index
        super().__init__(
            "records must contain only ImportRecord instances "
            f"(found {found.__name__} at index {index})",
        )


class MissingHashConfigError(BatchValidationError):
    """A record carries a password hash but no hash config was given."""


class InvalidHashConfigError(BatchValidationError):
    """The hash config given for the batch is not a HashAlgorithmConfig."""


class ResponseFormatError(UserImportError):
    """The identity service response could not be interpreted."""
