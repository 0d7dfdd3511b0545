"""
Request parameter objects.

Each object exposes the named options of one operation and flattens them to a
plain ``dict`` with :meth:`to_params` before the request is built. Options the
objects do not model can still be passed with :meth:`BaseParameters.set`.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from .types import FileType, RetrievalType

CLIENT_LIB_ID_KEY = "smartling.client_lib_id"
DIRECTIVE_PREFIX = "smartling."


@dataclass
class BaseParameters:
    """Parameters shared by every operation: free-form extras only."""

    extra: Dict[str, Any] = field(default_factory=dict)

    def set(self, key: str, value: Any) -> "BaseParameters":
        self.extra[key] = value
        return self

    def _own_params(self) -> Dict[str, Any]:
        return {}

    def to_params(self) -> Dict[str, Any]:
        params = dict(self.extra)
        params.update({k: v for k, v in self._own_params().items() if v is not None})
        return params


@dataclass
class UploadFileParameters(BaseParameters):
    """
    Options for uploading source content.

    - authorize: make every string available for translation in all locales
    - locales_to_authorize: authorize strings only for these locales
    - callback_url: URL Smartling calls once the file is fully translated
    - client_lib_id: identifies the integration that uploaded the file
    """

    authorize: Optional[bool] = None
    locales_to_authorize: List[str] = field(default_factory=list)
    callback_url: Optional[str] = None
    client_lib_id: Optional[Dict[str, str]] = None

    def directive(self, name: str, value: Any) -> "UploadFileParameters":
        """Add a ``smartling.<name>`` file directive."""
        if not name.startswith(DIRECTIVE_PREFIX):
            name = DIRECTIVE_PREFIX + name
        self.extra[name] = value
        return self

    def set_client_lib_id(self, client: str, version: str) -> "UploadFileParameters":
        self.client_lib_id = {"client": client, "version": version}
        return self

    def _own_params(self) -> Dict[str, Any]:
        return {
            "authorize": self.authorize,
            "localeIdsToAuthorize[]": list(self.locales_to_authorize) or None,
            "callbackUrl": self.callback_url,
            CLIENT_LIB_ID_KEY: json.dumps(self.client_lib_id) if self.client_lib_id else None,
        }


@dataclass
class DownloadFileParameters(BaseParameters):
    """Options for downloading a translated file."""

    retrieval_type: Optional[RetrievalType] = None
    include_original_strings: Optional[bool] = None

    def __post_init__(self):
        if self.retrieval_type is not None:
            self.retrieval_type = RetrievalType(self.retrieval_type)

    def _own_params(self) -> Dict[str, Any]:
        return {
            "retrievalType": self.retrieval_type,
            "includeOriginalStrings": self.include_original_strings,
        }


@dataclass
class ListFilesParameters(BaseParameters):
    """
    Filters for listing recently uploaded files.

    uri_mask matches case-insensitively and treats % as a wildcard. File types
    are combined with a logical OR.
    """

    uri_mask: Optional[str] = None
    file_types: List[Union[FileType, str]] = field(default_factory=list)
    last_uploaded_after: Optional[datetime] = None
    last_uploaded_before: Optional[datetime] = None
    offset: Optional[int] = None
    limit: Optional[int] = None

    def __post_init__(self):
        if self.offset is not None and self.offset < 0:
            raise ValueError(f"offset must be >= 0, got {self.offset}")
        if self.limit is not None and self.limit <= 0:
            raise ValueError(f"limit must be > 0, got {self.limit}")

    def _own_params(self) -> Dict[str, Any]:
        return {
            "uriMask": self.uri_mask,
            "fileTypes[]": [FileType(t) for t in self.file_types] or None,
            "lastUploadedAfter": self.last_uploaded_after,
            "lastUploadedBefore": self.last_uploaded_before,
            "offset": self.offset,
            "limit": self.limit,
        }
