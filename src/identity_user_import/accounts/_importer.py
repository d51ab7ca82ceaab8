"""Bulk importing users into the identity service."""

import typing
from collections.abc import Mapping, Sequence

import structlog

from ._errors import (
    BatchTooLargeError,
    EmptyBatchError,
    InvalidBatchError,
    InvalidHashConfigError,
    InvalidRecordError,
    MissingHashConfigError,
)
from ._hashing import HashAlgorithmConfig
from ._outcome import ImportOutcome
from ._records import ImportRecord

logger = structlog.get_logger(__name__)

# Enforced by the identity service for a single batchCreate request
MAX_BATCH_SIZE = 1000


class HttpClient(typing.Protocol):
    """Sends authenticated requests to the identity service."""

    def post(
        self,
        path: str,
        payload: Mapping[str, typing.Any],
    ) -> Mapping[str, typing.Any]:
        """POSTs the payload as json to the path and returns the json body."""
        ...


def validate_batch(
    records: typing.Any,
    hash_config: typing.Any = None,
) -> None:
    """Checks that a batch can be submitted to the identity service.

    :raises BatchValidationError: the subclass naming the first problem found.
    """
    if not isinstance(records, Sequence) or isinstance(records, (str, bytes)):
        err = "records must be a sequence of ImportRecord"
        raise InvalidBatchError(err)
    if len(records) == 0:
        err = "records must not be empty"
        raise EmptyBatchError(err)
    if len(records) > MAX_BATCH_SIZE:
        err = f"records must not contain more than {MAX_BATCH_SIZE} elements"
        raise BatchTooLargeError(err)

    for i, r in enumerate(records):
        if not isinstance(r, ImportRecord):
            raise InvalidRecordError(i, type(r))

    if hash_config is None:
        if any(r.password_hash for r in records):
            err = "hash_config must be specified when importing users with passwords"
            raise MissingHashConfigError(err)
    elif not isinstance(hash_config, HashAlgorithmConfig):
        err = "hash_config must be a HashAlgorithmConfig"
        raise InvalidHashConfigError(err)


def build_payload(
    records: Sequence[ImportRecord],
    hash_config: HashAlgorithmConfig | None = None,
) -> dict[str, typing.Any]:
    """The batchCreate request body for an already validated batch."""
    payload: dict[str, typing.Any] = {"users": [r.serialize() for r in records]}
    if hash_config is not None:
        payload["hashConfig"] = hash_config.serialize()
    return payload


class BatchImporter:
    """Imports batches of users into a project of the identity service."""

    def __init__(self, client: HttpClient, project_id: str) -> None:
        """Initializes a new instance of BatchImporter."""
        if not isinstance(project_id, str) or len(project_id) == 0:
            err = "project_id must be a non-empty string"
            raise ValueError(err)

        self._client = client
        self._path = f"projects/{project_id}/accounts:batchCreate"

    def import_users(
        self,
        records: Sequence[ImportRecord],
        hash_config: HashAlgorithmConfig | None = None,
    ) -> ImportOutcome:
        """Imports up to 1000 users with a single request.

        Users are imported on a best effort basis, a batch where some users
        fail still returns normally and the failures are in the outcome.
        Errors sending the request are not caught and nothing is retried.

        :param records: The users to import.
        :param hash_config: How the password hashes were produced, required
            when any record has a ``password_hash``.
        :raises BatchValidationError: before sending anything if the batch
            can't be imported.
        :raises ResponseFormatError: if the response can't be interpreted.
        """
        validate_batch(records, hash_config)

        logger.info(
            "importing users",
            count=len(records),
            hash_algorithm=hash_config.algorithm.value if hash_config else None,
        )
        response = self._client.post(self._path, build_payload(records, hash_config))
        outcome = ImportOutcome.from_response(response)

        logger.info(
            "imported users",
            success_count=outcome.success_count,
            failure_count=outcome.failure_count,
        )
        for e in outcome.errors:
            logger.warning("user failed to import", index=e.index, message=e.message)

        return outcome
