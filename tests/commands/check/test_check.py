import io
from pathlib import Path
from unittest import mock

import httpx
from pytest_cases import parametrize


def _status_error(status: int, body: str) -> httpx.HTTPStatusError:
    return httpx.HTTPStatusError(
        "failed",
        request=httpx.Request("POST", "https://identity.example.com"),
        response=httpx.Response(status, text=body),
    )


@parametrize(
    "error,expected",
    [
        (None, None),
        (
            _status_error(403, '{"error": {"message": "PERMISSION_DENIED"}}'),
            "PERMISSION_DENIED",
        ),
        (_status_error(502, "Bad Gateway"), "[502] Bad Gateway"),
        (httpx.ConnectError("name resolution failed"), "Could not connect"),
    ],
)
def test_check_service(
    error: Exception | None,
    expected: str | None,
    tmp_path: Path,
) -> None:
    import identity_user_import.commands.check as uut

    data = tmp_path / "users.csv"
    data.write_text("uid\nu1\n")

    with mock.patch.object(uut.IdentityService, "test", side_effect=error) as test:
        res = uut.run(uut.CheckOptions("https://x", "p", "t", data))

    test.assert_called_once()
    assert res.service_ok == (expected is None)
    if expected is not None:
        assert res.service_error is not None
        assert expected in res.service_error
    assert res.read_ok
    assert res.schema_ok


def test_check_data_errors(tmp_path: Path) -> None:
    import identity_user_import.commands.check as uut

    good = tmp_path / "good.csv"
    good.write_text("uid\nu1\n")
    bad = tmp_path / "bad.csv"
    bad.write_text("uid,phoneNumber\nu1,555\n")
    empty = tmp_path / "empty.csv"
    empty.write_text("")

    with mock.patch.object(uut.IdentityService, "test"):
        res = uut.run(
            uut.CheckOptions(
                "https://x",
                "p",
                "t",
                {"good": good, "bad": bad, "empty": empty},
            ),
        )

    assert res.service_ok
    assert res.schema_errors is not None
    assert list(res.schema_errors.keys()) == ["bad"]
    assert res.read_errors is not None
    assert list(res.read_errors.keys()) == ["empty"]

    out = io.StringIO()
    res.write_results(out)
    report = out.getvalue()
    assert "Identity service connection: OK" in report
    assert "Input data bad: FAILED validation" in report
    assert "Input data empty: FAILED to read" in report
