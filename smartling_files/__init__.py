"""
Smartling Files Python SDK
Python client for the Smartling Files API v2
"""

import logging

from .client import FileApiClient
from .auth import AuthProvider, AuthTokenProvider
from .config import Settings
from .params import (
    BaseParameters,
    UploadFileParameters,
    DownloadFileParameters,
    ListFilesParameters,
)
from .types import FileType, RetrievalType, TranslationState
from .errors import (
    SmartlingApiError,
    LocalIOError,
    RemoteApiError,
    MalformedResponseError,
    TransportError,
    ConfigurationError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
__all__ = [
    "FileApiClient",
    "AuthProvider",
    "AuthTokenProvider",
    "Settings",
    "BaseParameters",
    "UploadFileParameters",
    "DownloadFileParameters",
    "ListFilesParameters",
    "FileType",
    "RetrievalType",
    "TranslationState",
    "SmartlingApiError",
    "LocalIOError",
    "RemoteApiError",
    "MalformedResponseError",
    "TransportError",
    "ConfigurationError",
]
