import typing

import pytest
from pytest_cases import parametrize


def test_outcome_from_response() -> None:
    import identity_user_import.accounts as uut

    res = uut.ImportOutcome.from_response(
        {
            "successCount": 5,
            "failureCount": 2,
            "error": [
                {"index": 1, "message": "Invalid email"},
                {"index": 3, "message": "UID already exists"},
            ],
        },
    )

    assert res.success_count == 5
    assert res.failure_count == 2
    assert res.errors == (
        uut.ErrorEntry(1, "Invalid email"),
        uut.ErrorEntry(3, "UID already exists"),
    )
    assert res.has_failures


def test_outcome_preserves_error_order() -> None:
    import identity_user_import.accounts as uut

    res = uut.ImportOutcome.from_response(
        {
            "failureCount": 3,
            "error": [
                {"index": 7, "message": "c"},
                {"index": 0, "message": "a"},
                {"index": 7, "message": "b"},
            ],
        },
    )

    assert [(e.index, e.message) for e in res.errors] == [(7, "c"), (0, "a"), (7, "b")]


@parametrize(
    "response,success,failure",
    [
        ({}, 0, 0),
        ({"successCount": 3}, 3, 0),
        ({"failureCount": 1}, 0, 1),
        ({"successCount": 2, "failureCount": 1, "error": None}, 2, 1),
    ],
)
def test_outcome_defaults(
    response: dict[str, typing.Any],
    success: int,
    failure: int,
) -> None:
    import identity_user_import.accounts as uut

    res = uut.ImportOutcome.from_response(response)

    assert res.success_count == success
    assert res.failure_count == failure
    assert res.errors == ()


def test_outcome_counts_are_not_recomputed() -> None:
    import identity_user_import.accounts as uut

    res = uut.ImportOutcome.from_response(
        {
            "successCount": 990,
            "failureCount": 10,
            "error": [{"index": 12, "message": "Invalid email"}],
        },
    )

    assert res.failure_count == 10
    assert len(res.errors) == 1


def test_outcome_without_failures() -> None:
    import identity_user_import.accounts as uut

    res = uut.ImportOutcome.from_response({"successCount": 3})

    assert not res.has_failures


@parametrize(
    response=[
        {"successCount": "5"},
        {"failureCount": -1},
        {"successCount": True},
        {"error": {"index": 1, "message": "m"}},
        {"error": ["m"]},
        {"error": [{"message": "m"}]},
        {"error": [{"index": "1", "message": "m"}]},
        {"error": [{"index": 1}]},
        {"error": [{"index": 1, "message": 2}]},
        ["successCount"],
    ],
)
def test_outcome_malformed(response: typing.Any) -> None:
    import identity_user_import.accounts as uut

    with pytest.raises(uut.ResponseFormatError):
        uut.ImportOutcome.from_response(response)
