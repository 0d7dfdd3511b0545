"""
SDK Types and Data Classes
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional
from enum import Enum


class RetrievalType(str, Enum):
    PENDING = "pending"
    PUBLISHED = "published"
    PSEUDO = "pseudo"
    CONTEXT_MATCHING_INSTRUMENTED = "contextMatchingInstrumented"


class TranslationState(str, Enum):
    PUBLISHED = "PUBLISHED"
    POST_TRANSLATION = "POST_TRANSLATION"


class FileType(str, Enum):
    ANDROID = "android"
    IOS = "ios"
    GETTEXT = "gettext"
    HTML = "html"
    JAVA_PROPERTIES = "javaProperties"
    YAML = "yaml"
    XLIFF = "xliff"
    XML = "xml"
    JSON = "json"
    DOCX = "docx"
    PPTX = "pptx"
    XLSX = "xlsx"
    IDML = "idml"
    QT = "qt"
    RESX = "resx"
    PLAINTEXT = "plaintext"
    CSV = "csv"
    STRINGSDICT = "stringsdict"


@dataclass(frozen=True)
class ClientConfig:
    project_id: str
    base_url: str


@dataclass
class AuthTokens:
    access_token: str
    refresh_token: str
    token_type: str
    # None when the API did not report a lifetime; such a token is kept until reset.
    expires_in: Optional[int]
    refresh_expires_in: Optional[int]
    issued_at: datetime = field(default_factory=datetime.now)

    @property
    def expires_at(self) -> Optional[datetime]:
        if self.expires_in is None:
            return None
        return self.issued_at + timedelta(seconds=self.expires_in)

    @property
    def refresh_expires_at(self) -> Optional[datetime]:
        if self.refresh_expires_in is None:
            return None
        return self.issued_at + timedelta(seconds=self.refresh_expires_in)

    def is_expired(self, margin: float = 0.0, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        now = now or datetime.now()
        return now + timedelta(seconds=margin) >= self.expires_at

    def can_refresh(self, margin: float = 0.0, now: Optional[datetime] = None) -> bool:
        if not self.refresh_token:
            return False
        if self.refresh_expires_at is None:
            return True
        now = now or datetime.now()
        return now + timedelta(seconds=margin) < self.refresh_expires_at
