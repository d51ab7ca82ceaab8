"""User accounts to be imported in bulk."""

import json
import typing
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from . import _validation as v
from ._errors import RecordValidationError
from ._providers import IdentityProviderLink

JsonValue = (
    str | int | float | bool | None | list["JsonValue"] | dict[str, "JsonValue"]
)


@dataclass(frozen=True)
class ImportRecord:
    """A user account to import into the identity service.

    Only ``uid`` is required. Every other field is left out of the request
    when it is not set, which lets the service tell "unset" apart from
    "cleared".

    If ``password_hash`` is set, the batch the record is imported in must
    be given a :class:`HashAlgorithmConfig` describing how it was produced.
    ``password_hash`` and ``password_salt`` are passed through as given and
    are expected to be base64 encoded.
    """

    uid: str
    email: str | None = None
    email_verified: bool | None = None
    display_name: str | None = None
    phone_number: str | None = None
    photo_url: str | None = None
    disabled: bool | None = None
    custom_claims: Mapping[str, JsonValue] | None = None
    password_hash: str | None = None
    password_salt: str | None = None
    provider_data: Sequence[IdentityProviderLink] | None = None

    def __post_init__(self) -> None:
        """Validates the record and freezes its container fields."""
        v.uid(self.uid)
        v.optional_str(self.email, "email")
        v.optional_bool(self.email_verified, "email_verified")
        v.optional_str(self.display_name, "display_name", allow_empty=True)
        v.optional_phone_number(self.phone_number, "phone_number")
        v.optional_str(self.photo_url, "photo_url")
        v.optional_bool(self.disabled, "disabled")
        v.optional_str(self.password_hash, "password_hash")
        v.optional_str(self.password_salt, "password_salt")

        if self.custom_claims is not None:
            if not isinstance(self.custom_claims, Mapping):
                err = "custom_claims must be a mapping"
                raise RecordValidationError(err)
            try:
                json.dumps(dict(self.custom_claims))
            except (TypeError, ValueError) as e:
                err = f"custom_claims must be JSON serializable: {e}"
                raise RecordValidationError(err) from e
            object.__setattr__(
                self,
                "custom_claims",
                MappingProxyType(dict(self.custom_claims)),
            )

        if self.provider_data is not None:
            if not isinstance(self.provider_data, Sequence) or isinstance(
                self.provider_data,
                str,
            ):
                err = "provider_data must be a sequence"
                raise RecordValidationError(err)
            for i, p in enumerate(self.provider_data):
                if not isinstance(p, IdentityProviderLink):
                    err = (
                        "provider_data must contain only IdentityProviderLink "
                        f"instances (found {type(p).__name__} at index {i})"
                    )
                    raise RecordValidationError(err)
            object.__setattr__(self, "provider_data", tuple(self.provider_data))

    def serialize(self) -> dict[str, typing.Any]:
        """The record as a batchCreate user entry with unset fields omitted."""
        wire: dict[str, typing.Any] = {
            "localId": self.uid,
            "email": self.email,
            "emailVerified": self.email_verified,
            "displayName": self.display_name,
            "phoneNumber": self.phone_number,
            "photoUrl": self.photo_url,
            "disabled": self.disabled,
            "passwordHash": self.password_hash,
            "salt": self.password_salt,
        }
        if self.custom_claims is not None:
            wire["customAttributes"] = json.dumps(dict(self.custom_claims))
        if self.provider_data is not None:
            wire["providerUserInfo"] = [p.serialize() for p in self.provider_data]

        return {k: val for k, val in wire.items() if val is not None}
