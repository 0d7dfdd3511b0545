"""
Authentication Provider
"""

import logging
import threading
from typing import Optional, Protocol, Tuple

import httpx

from .config import DEFAULT_AUTH_URL
from .envelope import raise_for_error, unwrap
from .errors import MalformedResponseError, RemoteApiError, TransportError
from .types import AuthTokens

DEFAULT_TOKEN_TYPE = "Bearer"
# Seconds before expiry at which a token is already treated as expired.
EXPIRY_MARGIN = 10


def _seconds(value) -> Optional[int]:
    return None if value is None else int(value)


class AuthProvider(Protocol):
    """Source of the bearer token used by the Files API client."""

    def get_access_token(self) -> str:
        ...

    def get_token_type(self) -> str:
        ...

    def reset_token(self) -> None:
        ...


class AuthTokenProvider:
    """Authenticates against the Smartling Auth API and caches the issued tokens."""

    def __init__(
        self,
        user_identifier: str,
        secret_key: str,
        http_client: httpx.Client,
        base_url: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._user_identifier = user_identifier
        self._secret_key = secret_key
        self._http = http_client
        self._base_url = (base_url or DEFAULT_AUTH_URL).rstrip("/")
        self._logger = logger or logging.getLogger(__name__)
        self._tokens: Optional[AuthTokens] = None
        self._lock = threading.Lock()

    @classmethod
    def create(
        cls,
        user_identifier: str,
        secret_key: str,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
    ) -> "AuthTokenProvider":
        """Build a provider with its own HTTP client."""
        return cls(user_identifier, secret_key, httpx.Client(timeout=timeout), base_url)

    def get_access_token(self) -> str:
        return self._current_tokens().access_token

    def get_token_type(self) -> str:
        return self._current_tokens().token_type

    def get_authorization(self) -> Tuple[str, str]:
        """Token type and access token taken from the same cached tokens."""
        tokens = self._current_tokens()
        return tokens.token_type, tokens.access_token

    def reset_token(self) -> None:
        """Forget cached tokens; the next call authenticates again."""
        with self._lock:
            self._tokens = None
        self._logger.debug("Smartling access token reset")

    def get_tokens(self) -> Optional[AuthTokens]:
        """Get current tokens without authenticating."""
        return self._tokens

    def _current_tokens(self) -> AuthTokens:
        with self._lock:
            tokens = self._tokens
            if tokens is None:
                tokens = self._authenticate()
            elif tokens.is_expired(EXPIRY_MARGIN):
                if tokens.can_refresh(EXPIRY_MARGIN):
                    try:
                        tokens = self._refresh(tokens.refresh_token)
                    except RemoteApiError as e:
                        self._logger.warning(f"Token refresh failed, authenticating again: {e}")
                        tokens = self._authenticate()
                else:
                    tokens = self._authenticate()
            self._tokens = tokens
            return tokens

    def _authenticate(self) -> AuthTokens:
        self._logger.debug(f"Authenticating Smartling user {self._user_identifier}")
        data = self._post(
            "/authenticate",
            {"userIdentifier": self._user_identifier, "userSecret": self._secret_key},
        )
        return self._to_tokens(data)

    def _refresh(self, refresh_token: str) -> AuthTokens:
        self._logger.debug("Refreshing Smartling access token")
        data = self._post("/authenticate/refresh", {"refreshToken": refresh_token})
        return self._to_tokens(data)

    def _post(self, path: str, payload: dict) -> dict:
        try:
            response = self._http.post(
                f"{self._base_url}{path}",
                json=payload,
                headers={"Accept": "application/json"},
            )
        except httpx.TransportError as e:
            raise TransportError(f"Connection error: {e}") from e

        raise_for_error(response)
        data = unwrap(response)
        if not isinstance(data, dict):
            raise MalformedResponseError(status_code=response.status_code, body=response.text)
        return data

    def _to_tokens(self, data: dict) -> AuthTokens:
        try:
            return AuthTokens(
                access_token=data["accessToken"],
                refresh_token=data.get("refreshToken", ""),
                token_type=data.get("tokenType") or DEFAULT_TOKEN_TYPE,
                expires_in=_seconds(data.get("expiresIn")),
                refresh_expires_in=_seconds(data.get("refreshExpiresIn")),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedResponseError() from e
