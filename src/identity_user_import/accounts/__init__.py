"""Bulk import of user accounts into the identity service."""

from ._errors import (
    BatchTooLargeError,
    BatchValidationError,
    EmptyBatchError,
    HashConfigValidationError,
    InvalidBatchError,
    InvalidHashConfigError,
    InvalidRecordError,
    MissingHashConfigError,
    RecordValidationError,
    ResponseFormatError,
    UserImportError,
)
from ._hashing import HashAlgorithm, HashAlgorithmConfig
from ._importer import (
    MAX_BATCH_SIZE,
    BatchImporter,
    HttpClient,
    build_payload,
    validate_batch,
)
from ._outcome import ErrorEntry, ImportOutcome
from ._providers import IdentityProviderLink
from ._records import ImportRecord, JsonValue
from ._validation import MAX_UID_LENGTH, PHONE_NUMBER

__all__ = [
    "MAX_BATCH_SIZE",
    "MAX_UID_LENGTH",
    "PHONE_NUMBER",
    "BatchImporter",
    "BatchTooLargeError",
    "BatchValidationError",
    "EmptyBatchError",
    "ErrorEntry",
    "HashAlgorithm",
    "HashAlgorithmConfig",
    "HashConfigValidationError",
    "HttpClient",
    "IdentityProviderLink",
    "ImportOutcome",
    "ImportRecord",
    "InvalidBatchError",
    "InvalidHashConfigError",
    "InvalidRecordError",
    "JsonValue",
    "MissingHashConfigError",
    "RecordValidationError",
    "ResponseFormatError",
    "UserImportError",
    "build_payload",
    "validate_batch",
]
