"""Results of importing a batch of users."""

import typing
from collections.abc import Mapping
from dataclasses import dataclass

from ._errors import ResponseFormatError


def _int_field(response: Mapping[str, typing.Any], name: str) -> int:
    value = response.get(name)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        err = f"Expected {name} to be a non-negative integer but got {value!r}"
        raise ResponseFormatError(err)
    return value


@dataclass(frozen=True)
class ErrorEntry:
    """A user that could not be imported."""

    """The position of the user in the batch as it was submitted."""
    index: int

    """Why the identity service rejected the user."""
    message: str

    @classmethod
    def from_response(cls, error: typing.Any) -> "ErrorEntry":
        """Reads one entry of the error list of a batchCreate response."""
        if not isinstance(error, Mapping):
            err = f"Expected an error object but got {error!r}"
            raise ResponseFormatError(err)

        index = error.get("index")
        message = error.get("message")
        if isinstance(index, bool) or not isinstance(index, int):
            err = f"Expected error index to be an integer but got {index!r}"
            raise ResponseFormatError(err)
        if not isinstance(message, str):
            err = f"Expected error message to be a string but got {message!r}"
            raise ResponseFormatError(err)

        return cls(index, message)


@dataclass(frozen=True)
class ImportOutcome:
    """The result of importing one batch of users.

    Importing is best effort per user so a batch where some users failed
    still produces an outcome. The counts are reported by the identity
    service and are not derived from ``errors``, which may be incomplete.
    """

    success_count: int
    failure_count: int
    errors: tuple[ErrorEntry, ...] = ()

    @property
    def has_failures(self) -> bool:
        """Did any user in the batch fail to import?"""
        return self.failure_count > 0 or len(self.errors) > 0

    @classmethod
    def from_response(cls, response: Mapping[str, typing.Any]) -> "ImportOutcome":
        """Reads the outcome from a batchCreate response body.

        Missing counts are read as 0 and a missing error list as empty.

        :raises ResponseFormatError: when a field is present but malformed.
        """
        if not isinstance(response, Mapping):
            err = f"Expected a response object but got {type(response).__name__}"
            raise ResponseFormatError(err)

        errors = response.get("error")
        if errors is None:
            errors = []
        if not isinstance(errors, list):
            err = f"Expected error to be a list but got {errors!r}"
            raise ResponseFormatError(err)

        return cls(
            _int_field(response, "successCount"),
            _int_field(response, "failureCount"),
            tuple(ErrorEntry.from_response(e) for e in errors),
        )
