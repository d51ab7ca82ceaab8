import re
import typing

from ._errors import RecordValidationError

MAX_UID_LENGTH = 128

# E.164, e.g. +15555550100
PHONE_NUMBER = r"^\+[0-9]{1,14}$"
_PHONE_NUMBER = re.compile(PHONE_NUMBER)


def uid(value: typing.Any, field: str = "uid") -> str:
    if not isinstance(value, str) or len(value) == 0:
        err = f"{field} must be a non-empty string"
        raise RecordValidationError(err)
    if len(value) > MAX_UID_LENGTH:
        err = f"{field} must not be longer than {MAX_UID_LENGTH} characters"
        raise RecordValidationError(err)
    return value


def required_str(value: typing.Any, field: str) -> str:
    if not isinstance(value, str) or len(value) == 0:
        err = f"{field} must be a non-empty string"
        raise RecordValidationError(err)
    return value


def optional_str(
    value: typing.Any,
    field: str,
    *,
    allow_empty: bool = False,
) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        err = f"{field} must be a string"
        raise RecordValidationError(err)
    if not allow_empty and len(value) == 0:
        err = f"{field} must not be empty"
        raise RecordValidationError(err)
    return value


def optional_bool(value: typing.Any, field: str) -> bool | None:
    if value is None or isinstance(value, bool):
        return value
    err = f"{field} must be a boolean"
    raise RecordValidationError(err)


def optional_phone_number(value: typing.Any, field: str) -> str | None:
    if optional_str(value, field, allow_empty=True) is None:
        return None
    if not _PHONE_NUMBER.fullmatch(value):
        err = f"{field} must be an E.164 identifier"
        raise RecordValidationError(err)
    return typing.cast(str, value)
