"""
Smartling Files API Client
"""

import logging
import os
from contextlib import ExitStack
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import httpx

from .auth import AuthProvider, AuthTokenProvider
from .config import DEFAULT_SERVICE_URL, Settings
from .envelope import raise_for_error, unwrap
from .errors import ConfigurationError, LocalIOError, TransportError
from .params import BaseParameters
from .types import ClientConfig, TranslationState

REQUEST_TYPE_GET = "GET"
REQUEST_TYPE_POST = "POST"
QUERY_METHODS = (REQUEST_TYPE_GET, "DELETE")
FILE_PARAM = "file"

Params = Union[BaseParameters, Mapping[str, Any], None]


def render_value(value: Any) -> str:
    """Render a scalar parameter the way the Smartling API expects it."""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.strftime("%Y-%m-%dT%H:%M:%SZ")
    return str(value)


def flatten_params(params: Mapping[str, Any]) -> List[Tuple[str, str]]:
    """Flatten a parameter map into ``(name, value)`` pairs; lists repeat their key."""
    pairs = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple, set)):
            pairs.extend((key, render_value(item)) for item in value)
        else:
            pairs.append((key, render_value(value)))
    return pairs


class FileApiClient:
    """
    Client for the Smartling Files API v2.

    Usage:
        client = FileApiClient.create("project-id", "user-identifier", "secret")

        client.upload_file("/path/to/strings.xml", "strings.xml", FileType.XML)
        content = client.download_file("strings.xml", "ru-RU")

    Every operation raises a subclass of SmartlingApiError on failure.
    """

    def __init__(
        self,
        project_id: str,
        auth: AuthProvider,
        http_client: httpx.Client,
        logger: Optional[logging.Logger] = None,
        base_url: Optional[str] = None,
    ):
        self.config = ClientConfig(
            project_id=project_id,
            base_url=(base_url or DEFAULT_SERVICE_URL).rstrip("/") + "/" + project_id,
        )
        self._auth = auth
        self._http = http_client
        self._logger = logger or logging.getLogger(__name__)
        self._owns_http = False

    @classmethod
    def create(
        cls,
        project_id: str,
        user_identifier: str,
        secret_key: str,
        base_url: Optional[str] = None,
        auth_url: Optional[str] = None,
        timeout: float = 30.0,
    ) -> "FileApiClient":
        """Build a client with a default HTTP client and auth provider."""
        http_client = httpx.Client(timeout=timeout)
        auth = AuthTokenProvider(user_identifier, secret_key, http_client, base_url=auth_url)
        client = cls(project_id, auth, http_client, base_url=base_url)
        client._owns_http = True
        return client

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "FileApiClient":
        """Build a client from SMARTLING_* environment settings."""
        settings = settings or Settings()
        missing = settings.missing_credentials()
        if missing:
            raise ConfigurationError(missing)
        return cls.create(
            settings.project_id,
            settings.user_identifier,
            settings.user_secret,
            base_url=settings.base_url,
            auth_url=settings.auth_url,
            timeout=settings.timeout,
        )

    @property
    def project_id(self) -> str:
        return self.config.project_id

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http:
            self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # Request pipeline

    def _send_request(
        self,
        uri: str,
        request_data: Mapping[str, Any],
        method: str,
        process_response_body: bool = True,
    ) -> Any:
        """
        Send a request to the Files API and unwrap the response envelope.

        GET and DELETE send parameters as a query string, any other method as
        multipart form parts. A ``file`` entry is sent as a binary part.
        With process_response_body False the raw body bytes are returned.
        """
        request_data = dict(request_data)
        url = f"{self.base_url}/{uri.lstrip('/')}"

        with ExitStack() as stack:
            query = None
            parts = None
            if method in QUERY_METHODS:
                query = flatten_params(request_data)
            else:
                parts = []
                file_path = request_data.pop(FILE_PARAM, None)
                if file_path:
                    stream = stack.enter_context(self._read_file(file_path))
                    parts.append((FILE_PARAM, (os.path.basename(os.fspath(file_path)), stream)))
                parts.extend((key, (None, value)) for key, value in flatten_params(request_data))

            headers = {
                "Accept": "application/json",
                "Authorization": self._authorization(),
            }

            self._logger.debug(f"{method} {url}")
            try:
                response = self._http.request(
                    method,
                    url,
                    params=query,
                    files=parts or None,
                    headers=headers,
                )
            except httpx.TransportError as e:
                raise TransportError(f"Connection error: {e}") from e

        if response.status_code == 401:
            self._logger.info("Smartling rejected the access token, resetting it")
            self._auth.reset_token()

        if response.status_code >= 400:
            self._logger.warning(f"{method} {url} failed with status {response.status_code}")
            raise_for_error(response)

        if not process_response_body:
            return response.content

        return unwrap(response)

    def _authorization(self) -> str:
        get_authorization = getattr(self._auth, "get_authorization", None)
        if get_authorization is not None:
            token_type, token = get_authorization()
        else:
            token = self._auth.get_access_token()
            token_type = self._auth.get_token_type()
        return f"{token_type} {token}"

    def _read_file(self, path: Union[str, "os.PathLike[str]"]):
        try:
            return open(path, "rb")
        except OSError as e:
            raise LocalIOError(os.fspath(path), str(e)) from e

    @staticmethod
    def _prepare(params: Params) -> Dict[str, Any]:
        if params is None:
            return {}
        if isinstance(params, BaseParameters):
            return params.to_params()
        return dict(params)

    # Operations

    def upload_file(
        self,
        real_path: Union[str, "os.PathLike[str]"],
        file_uri: str,
        file_type: str,
        params: Params = None,
    ) -> Any:
        """Upload original source content; returns data about the uploaded file."""
        request_data = self._prepare(params)
        request_data[FILE_PARAM] = real_path
        request_data["fileUri"] = file_uri
        request_data["fileType"] = file_type
        return self._send_request("file", request_data, REQUEST_TYPE_POST)

    def download_file(self, file_uri: str, locale: str = "", params: Params = None) -> Optional[bytes]:
        """
        Download the file translated into ``locale``.

        Returns the file content as bytes, unchanged. Nothing is requested and None is
        returned when locale is empty.
        """
        if not locale:
            return None

        request_data = self._prepare(params)
        request_data["fileUri"] = file_uri
        return self._send_request(f"locales/{locale}/file", request_data, REQUEST_TYPE_GET, False)

    def get_status(self, file_uri: str, locale: str, params: Params = None) -> Any:
        """Translation progress of a file for one locale."""
        request_data = self._prepare(params)
        request_data["fileUri"] = file_uri
        return self._send_request(f"locales/{locale}/file/status", request_data, REQUEST_TYPE_GET)

    def get_list(self, params: Params = None) -> Any:
        """List recently uploaded files (at most 500)."""
        return self._send_request("files/list", self._prepare(params), REQUEST_TYPE_GET)

    def rename_file(self, file_uri: str, new_file_uri: str, params: Params = None) -> Any:
        request_data = self._prepare(params)
        request_data["fileUri"] = file_uri
        request_data["newFileUri"] = new_file_uri
        return self._send_request("file/rename", request_data, REQUEST_TYPE_POST)

    def delete_file(self, file_uri: str, params: Params = None) -> Any:
        """
        Remove a file from Smartling.

        Deletion is asynchronous on Smartling's side; the file URI cannot be
        reused until it completes.
        """
        request_data = self._prepare(params)
        request_data["fileUri"] = file_uri
        return self._send_request("file/delete", request_data, REQUEST_TYPE_POST)

    def import_file(
        self,
        locale: str,
        file_uri: str,
        file_type: str,
        real_path: Union[str, "os.PathLike[str]"],
        translation_state: Union[TranslationState, str],
        overwrite: bool = False,
    ) -> Any:
        """Import translated content for an already uploaded file."""
        request_data = {
            "fileUri": file_uri,
            "fileType": file_type,
            FILE_PARAM: real_path,
            "translationState": translation_state,
            "overwrite": overwrite,
        }
        return self._send_request(f"locales/{locale}/file/import", request_data, REQUEST_TYPE_POST)

    def get_authorized_locales(self, file_uri: str, params: Params = None) -> Any:
        request_data = self._prepare(params)
        request_data["fileUri"] = file_uri
        return self._send_request("file/authorized-locales", request_data, REQUEST_TYPE_GET)

    def get_status_all_locales(self, file_uri: str, params: Params = None) -> Any:
        """Translation progress of a file for every locale."""
        request_data = self._prepare(params)
        request_data["fileUri"] = file_uri
        return self._send_request("file/status", request_data, REQUEST_TYPE_GET)

    def get_last_modified(self, file_uri: str, params: Params = None) -> Any:
        request_data = self._prepare(params)
        request_data["fileUri"] = file_uri
        return self._send_request("file/last-modified", request_data, REQUEST_TYPE_GET)
