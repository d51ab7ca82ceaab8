import json
import typing
from dataclasses import dataclass

import pytest
from pytest_cases import parametrize, parametrize_with_cases

from identity_user_import.accounts import IdentityProviderLink


@dataclass
class RecordCase:
    kwargs: dict[str, typing.Any]
    expected: dict[str, typing.Any]


class ValidRecordCases:
    @parametrize(length=[1, 64, 128])
    def case_uid_only(self, length: int) -> RecordCase:
        return RecordCase({"uid": "u" * length}, {"localId": "u" * length})

    def case_all_fields(self) -> RecordCase:
        return RecordCase(
            {
                "uid": "user1",
                "email": "user1@example.com",
                "email_verified": True,
                "display_name": "User One",
                "phone_number": "+15555550100",
                "photo_url": "https://example.com/user1.png",
                "disabled": False,
                "custom_claims": {"admin": True, "groups": ["a", "b"]},
                "password_hash": "aGFzaA==",
                "password_salt": "c2FsdA==",
                "provider_data": [
                    IdentityProviderLink("g123", "google.com", email="u@gmail.com"),
                ],
            },
            {
                "localId": "user1",
                "email": "user1@example.com",
                "emailVerified": True,
                "displayName": "User One",
                "phoneNumber": "+15555550100",
                "photoUrl": "https://example.com/user1.png",
                "disabled": False,
                "customAttributes": '{"admin": true, "groups": ["a", "b"]}',
                "passwordHash": "aGFzaA==",
                "salt": "c2FsdA==",
                "providerUserInfo": [
                    {"rawId": "g123", "providerId": "google.com", "email": "u@gmail.com"},
                ],
            },
        )

    def case_false_flags_kept(self) -> RecordCase:
        return RecordCase(
            {"uid": "u", "email_verified": False, "disabled": False},
            {"localId": "u", "emailVerified": False, "disabled": False},
        )

    def case_empty_collections_kept(self) -> RecordCase:
        return RecordCase(
            {"uid": "u", "custom_claims": {}, "provider_data": []},
            {"localId": "u", "customAttributes": "{}", "providerUserInfo": []},
        )

    def case_empty_display_name(self) -> RecordCase:
        return RecordCase(
            {"uid": "u", "display_name": ""},
            {"localId": "u", "displayName": ""},
        )

    @parametrize(phone=["+1", "+12345678901234", "+447700900123"])
    def case_phone_number(self, phone: str) -> RecordCase:
        return RecordCase(
            {"uid": "u", "phone_number": phone},
            {"localId": "u", "phoneNumber": phone},
        )


class InvalidRecordCases:
    @parametrize(uid=["", "u" * 129, None, 123])
    def case_uid(self, uid: typing.Any) -> dict[str, typing.Any]:
        return {"uid": uid}

    @parametrize(email=["", 42])
    def case_email(self, email: typing.Any) -> dict[str, typing.Any]:
        return {"uid": "u", "email": email}

    def case_display_name(self) -> dict[str, typing.Any]:
        return {"uid": "u", "display_name": 42}

    @parametrize(
        phone=[
            "",
            "15555550100",
            "+",
            "+123456789012345",
            "+1 555 555",
            "+1-555",
            "+1555abc",
            "+15555550100\n",
            "+\u0661\u0662\u0663",
        ],
    )
    def case_phone_number(self, phone: str) -> dict[str, typing.Any]:
        return {"uid": "u", "phone_number": phone}

    def case_photo_url(self) -> dict[str, typing.Any]:
        return {"uid": "u", "photo_url": ""}

    @parametrize(field=["email_verified", "disabled"])
    def case_flags(self, field: str) -> dict[str, typing.Any]:
        return {"uid": "u", field: "yes"}

    @parametrize(claims=[["admin"], "admin", {"when": object()}])
    def case_custom_claims(self, claims: typing.Any) -> dict[str, typing.Any]:
        return {"uid": "u", "custom_claims": claims}

    @parametrize(field=["password_hash", "password_salt"])
    def case_password(self, field: str) -> dict[str, typing.Any]:
        return {"uid": "u", field: ""}

    @parametrize(
        providers=[
            "google.com",
            [{"uid": "g", "provider_id": "google.com"}],
            IdentityProviderLink("g", "google.com"),
        ],
    )
    def case_provider_data(self, providers: typing.Any) -> dict[str, typing.Any]:
        return {"uid": "u", "provider_data": providers}


@parametrize_with_cases("tc", cases=ValidRecordCases)
def test_valid_record(tc: RecordCase) -> None:
    import identity_user_import.accounts as uut

    record = uut.ImportRecord(**tc.kwargs)

    assert record.serialize() == tc.expected


@parametrize_with_cases("kwargs", cases=InvalidRecordCases)
def test_invalid_record(kwargs: dict[str, typing.Any]) -> None:
    import identity_user_import.accounts as uut

    with pytest.raises(uut.RecordValidationError):
        uut.ImportRecord(**kwargs)


def test_unset_fields_omitted() -> None:
    import identity_user_import.accounts as uut

    wire = uut.ImportRecord("u", email="u@example.com").serialize()

    assert wire == {"localId": "u", "email": "u@example.com"}
    assert None not in wire.values()


def test_custom_claims_are_a_json_string() -> None:
    import identity_user_import.accounts as uut

    claims = {"role": "admin", "level": 3, "nested": {"a": [1, None]}}
    wire = uut.ImportRecord("u", custom_claims=claims).serialize()

    assert isinstance(wire["customAttributes"], str)
    assert json.loads(wire["customAttributes"]) == claims


def test_record_is_immutable() -> None:
    import identity_user_import.accounts as uut

    claims = {"admin": True}
    providers = [IdentityProviderLink("g", "google.com")]
    record = uut.ImportRecord("u", custom_claims=claims, provider_data=providers)

    claims["admin"] = False
    providers.append(IdentityProviderLink("h", "github.com"))

    assert record.custom_claims == {"admin": True}
    assert record.provider_data == (IdentityProviderLink("g", "google.com"),)
    with pytest.raises(AttributeError):
        record.uid = "other"  # type: ignore[misc]
    with pytest.raises(TypeError):
        record.custom_claims["admin"] = False  # type: ignore[index]


_RECORD_FIELDS = {
    "localId": "uid",
    "email": "email",
    "emailVerified": "email_verified",
    "displayName": "display_name",
    "phoneNumber": "phone_number",
    "photoUrl": "photo_url",
    "disabled": "disabled",
    "passwordHash": "password_hash",
    "salt": "password_salt",
}
_LINK_FIELDS = {
    "rawId": "uid",
    "providerId": "provider_id",
    "email": "email",
    "displayName": "display_name",
    "photoUrl": "photo_url",
}


def _from_wire(wire: dict[str, typing.Any]) -> dict[str, typing.Any]:
    kwargs = {_RECORD_FIELDS[k]: v for k, v in wire.items() if k in _RECORD_FIELDS}
    if "customAttributes" in wire:
        kwargs["custom_claims"] = json.loads(wire["customAttributes"])
    if "providerUserInfo" in wire:
        kwargs["provider_data"] = [
            IdentityProviderLink(**{_LINK_FIELDS[k]: v for k, v in p.items()})
            for p in wire["providerUserInfo"]
        ]
    return kwargs


@parametrize_with_cases("tc", cases=ValidRecordCases)
def test_serialized_record_rebuilds(tc: RecordCase) -> None:
    import identity_user_import.accounts as uut

    record = uut.ImportRecord(**tc.kwargs)
    wire = record.serialize()

    assert uut.ImportRecord(**_from_wire(wire)) == record
    assert uut.ImportRecord(**_from_wire(wire)).serialize() == wire
