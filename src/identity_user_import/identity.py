"""Identity service connection related utils for managing users."""

import typing
from collections.abc import Generator, Iterator, Mapping
from contextlib import contextmanager

import httpx

from identity_user_import.accounts import ResponseFormatError

DEFAULT_ENDPOINT = "https://identitytoolkit.googleapis.com/v1"
DEFAULT_TIMEOUT = 30.0


class IdentityServiceOptions(typing.Protocol):
    """Options used for connecting to the identity service."""

    service_endpoint: str
    project_id: str
    token: str
    timeout: float


class TokenProvider(typing.Protocol):
    """Supplies the OAuth2 access token used to call the identity service."""

    def token(self) -> str:
        """A currently valid access token."""
        ...


class StaticTokenProvider:
    """A token provider for an access token obtained out of band."""

    def __init__(self, token: str) -> None:
        """Initializes a new instance of StaticTokenProvider."""
        if len(token) == 0:
            empty = "token must not be empty"
            raise ValueError(empty)
        self._token = token

    def token(self) -> str:
        """The access token given at construction."""
        return self._token


class BearerTokenAuth(httpx.Auth):
    """Authenticates each request with a fresh token from the provider."""

    def __init__(self, provider: TokenProvider) -> None:
        """Initializes a new instance of BearerTokenAuth."""
        self._provider = provider

    def auth_flow(
        self,
        request: httpx.Request,
    ) -> Generator[httpx.Request, httpx.Response, None]:
        """Sets the bearer token on the request."""
        request.headers["Authorization"] = f"Bearer {self._provider.token()}"
        yield request


class IdentityClient:
    """Posts json to the identity service's REST api."""

    def __init__(self, client: httpx.Client) -> None:
        """Initializes a new instance of IdentityClient."""
        self._client = client

    def post(
        self,
        path: str,
        payload: Mapping[str, typing.Any],
    ) -> Mapping[str, typing.Any]:
        """POSTs the payload and returns the parsed json response.

        :raises httpx.HTTPError: when the request fails or the service
            responds with an error status.
        :raises ResponseFormatError: when the body isn't a json object.
        """
        res = self._client.post(path, json=payload)
        res.raise_for_status()

        try:
            body = res.json()
        except ValueError as e:
            err = f"Expected json from {path} but got {res.text[:200]!r}"
            raise ResponseFormatError(err) from e
        if not isinstance(body, dict):
            err = f"Expected a json object from {path} but got {type(body).__name__}"
            raise ResponseFormatError(err)

        return body


class IdentityService:
    """The identity service connection factory."""

    def __init__(
        self,
        options: IdentityServiceOptions,
        token_provider: TokenProvider | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initializes a new instance of IdentityService."""
        self._options = options
        self._token_provider = token_provider or StaticTokenProvider(options.token)
        self._transport = transport

    @contextmanager
    def connect(self) -> Iterator[IdentityClient]:
        """Connects to the identity service and returns a client."""
        with httpx.Client(
            base_url=self._options.service_endpoint.rstrip("/") + "/",
            auth=BearerTokenAuth(self._token_provider),
            timeout=self._options.timeout,
            transport=self._transport,
        ) as c:
            yield IdentityClient(c)

    def test(self) -> bool:
        """Test that connection to the identity service is ok.

        It will not handle exceptions and should be called in try block.

        :returns True when the project's accounts could be queried
        """
        with self.connect() as client:
            client.post(
                f"projects/{self._options.project_id}/accounts:query",
                {"returnUserInfo": False},
            )
            return True
