"""Validates and bulk imports user accounts into an identity service."""

from identity_user_import.accounts import (
    BatchImporter,
    ErrorEntry,
    HashAlgorithm,
    HashAlgorithmConfig,
    IdentityProviderLink,
    ImportOutcome,
    ImportRecord,
)

__all__ = [
    "BatchImporter",
    "ErrorEntry",
    "HashAlgorithm",
    "HashAlgorithmConfig",
    "IdentityProviderLink",
    "ImportOutcome",
    "ImportRecord",
]
