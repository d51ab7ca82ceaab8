"""Command for quickly checking required inputs."""

import httpx

from identity_user_import.accounts import ResponseFormatError
from identity_user_import.data import InputData
from identity_user_import.identity import IdentityService

from ._models import CheckOptions, CheckResults


def _service_error(e: httpx.HTTPStatusError) -> str:
    try:
        return str(e.response.json()["error"]["message"])
    except (ValueError, KeyError, TypeError):
        return f"[{e.response.status_code}] {e.response.text}"


def _test_service(options: CheckOptions) -> str | None:
    try:
        IdentityService(options).test()
    except httpx.HTTPStatusError as e:
        return _service_error(e)
    except httpx.InvalidURL:
        return "Invalid identity service url"
    except httpx.TransportError as e:
        return f"Could not connect to the identity service: {e}"
    except ResponseFormatError as e:
        return str(e)

    return None


def run(options: CheckOptions) -> CheckResults:
    """Checks for connectivity and data validity."""
    return CheckResults(_test_service(options), *InputData(options).test())


__all__ = ["CheckOptions", "CheckResults", "run"]
