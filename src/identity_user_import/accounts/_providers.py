"""External identity provider accounts linked to an imported user."""

import typing
from dataclasses import dataclass

from . import _validation as v


@dataclass(frozen=True)
class IdentityProviderLink:
    """A user's account at an external identity provider.

    :param uid: The user's id as assigned by the provider.
    :param provider_id: The provider identifier, a domain name like
        ``google.com`` or an OpenID Connect issuer id.
    """

    uid: str
    provider_id: str
    email: str | None = None
    display_name: str | None = None
    photo_url: str | None = None

    def __post_init__(self) -> None:
        """Validates the provider link."""
        v.required_str(self.uid, "provider uid")
        v.required_str(self.provider_id, "provider_id")
        v.optional_str(self.email, "provider email")
        v.optional_str(self.display_name, "provider display_name")
        v.optional_str(self.photo_url, "provider photo_url")

    def serialize(self) -> dict[str, typing.Any]:
        """The link as a providerUserInfo entry with unset fields omitted."""
        wire = {
            "rawId": self.uid,
            "providerId": self.provider_id,
            "email": self.email,
            "displayName": self.display_name,
            "photoUrl": self.photo_url,
        }
        return {k: val for k, val in wire.items() if val is not None}
