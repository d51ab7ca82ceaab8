"""Schema for csv files of users to import."""

import json
import typing

import pandera.polars as pla
import polars as pl

from identity_user_import.accounts import (
    MAX_UID_LENGTH,
    PHONE_NUMBER,
    IdentityProviderLink,
    RecordValidationError,
)

# csv column -> IdentityProviderLink field
PROVIDER_FIELDS = {
    "uid": "uid",
    "providerId": "provider_id",
    "email": "email",
    "displayName": "display_name",
    "photoUrl": "photo_url",
}


def is_json_object(maybe: str) -> bool:
    try:
        return isinstance(json.loads(maybe), dict)
    except (TypeError, ValueError):
        return False


def parse_provider_data(raw: str) -> list[IdentityProviderLink]:
    """Reads the json array of a providerData column into provider links.

    :raises RecordValidationError: when an entry isn't a valid link.
    """
    providers = json.loads(raw)
    if not isinstance(providers, list):
        err = "providerData must be a json array"
        raise RecordValidationError(err)

    links = []
    for p in providers:
        if not isinstance(p, dict) or len(set(p.keys()) - PROVIDER_FIELDS.keys()) > 0:
            err = f"providerData entries must be objects with keys {list(PROVIDER_FIELDS)}"
            raise RecordValidationError(err)
        links.append(
            IdentityProviderLink(**{PROVIDER_FIELDS[k]: v for k, v in p.items()}),
        )
    return links


def is_provider_data(maybe: str) -> bool:
    try:
        parse_provider_data(maybe)
    except (ValueError, TypeError):
        return False

    return True


def _optional_str(description: str, checks: list[pla.Check] | None = None) -> pla.Column:
    return pla.Column(
        str,
        description=description,
        required=False,
        nullable=True,
        checks=[pla.Check.str_length(min_value=1, name="not_empty"), *(checks or [])],
    )


def _optional_bool(description: str) -> pla.Column:
    return pla.Column(bool, description=description, required=False, nullable=True)


UserImportSchema = pla.DataFrameSchema(
    {
        "uid": pla.Column(
            str,
            description="The user's unique id in the identity service",
            checks=[
                pla.Check.str_length(
                    min_value=1,
                    max_value=MAX_UID_LENGTH,
                    name="uid_length",
                ),
            ],
        ),
        "email": _optional_str("The user's primary email address"),
        "emailVerified": _optional_bool("Whether the primary email is verified"),
        "displayName": pla.Column(
            str,
            description="The user's display name",
            required=False,
            nullable=True,
        ),
        "phoneNumber": _optional_str(
            "The user's primary phone number in E.164 format",
            [pla.Check.str_matches(PHONE_NUMBER, name="e164")],
        ),
        "photoUrl": _optional_str("Link to the user's photo"),
        "disabled": _optional_bool("Whether the user's account is disabled"),
        "customClaims": _optional_str(
            "A json object of custom claims to set on the user",
            [pla.Check(is_json_object, element_wise=True, name="invalid")],
        ),
        "passwordHash": _optional_str("The base64 encoded password hash"),
        "passwordSalt": _optional_str("The base64 encoded password salt"),
        "providerData": _optional_str(
            "A json array of linked identity provider accounts",
            [pla.Check(is_provider_data, element_wise=True, name="invalid")],
        ),
    },
    strict=True,
)

_BOOL_COLUMNS = {"emailVerified", "disabled"}

# read types for the schema columns, inference turns all-null columns into strings
COLUMN_TYPES: dict[str, typing.Any] = {
    name: pl.Boolean if name in _BOOL_COLUMNS else pl.String
    for name in UserImportSchema.columns
}
