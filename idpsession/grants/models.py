"""Persisted grants: the revocable artifacts held server side.

All three kinds share one shape: an opaque bearer key, the subject and
client they were issued to, an issue time and a lifetime in seconds.
"""

from __future__ import annotations

import enum
import time
from dataclasses import asdict
from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import ClassVar

from idpsession.common.security import generate_token


class GrantKind(str, enum.Enum):
    AUTHORIZATION_CODE = "authorization_code"
    REFRESH_TOKEN = "refresh_token"
    REFERENCE_TOKEN = "reference_token"


def generate_grant_key(length=64):
    """Create a new grant key. Keys are bearer credentials, they MUST be
    unique and unguessable.
    """
    return generate_token(length)


class PersistedGrant:
    """Base of the grant kinds. Every grant exposes ``key``, ``subject_id``
    and ``client_id``, either as fields or derived from its payload.
    """

    kind: ClassVar[GrantKind]

    issued_at: int
    lifetime: int

    @property
    def key(self) -> str:
        raise NotImplementedError()

    def get_expires_at(self) -> int:
        return self.issued_at + self.lifetime

    def is_expired(self, now=None) -> bool:
        if now is None:
            now = time.time()
        return self.get_expires_at() < now

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]):
        return cls(**data)


@dataclass
class AuthorizationCode(PersistedGrant):
    kind: ClassVar[GrantKind] = GrantKind.AUTHORIZATION_CODE

    code: str
    client_id: str
    subject_id: str
    request_data: dict[str, Any] = field(default_factory=dict)
    issued_at: int = field(default_factory=lambda: int(time.time()))
    lifetime: int = 300

    @property
    def key(self):
        return self.code

    def get_code_challenge(self):
        return self.request_data.get("code_challenge")

    def get_code_challenge_method(self):
        return self.request_data.get("code_challenge_method")


@dataclass
class RefreshToken(PersistedGrant):
    kind: ClassVar[GrantKind] = GrantKind.REFRESH_TOKEN

    handle: str
    subject_id: str
    client_id: str
    claims: dict[str, Any] = field(default_factory=dict)
    issued_at: int = field(default_factory=lambda: int(time.time()))
    lifetime: int = 2592000

    @property
    def key(self):
        return self.handle


@dataclass
class ReferenceToken(PersistedGrant):
    """Opaque access token whose claims are resolved by lookup. Subject and
    client are read from the ``sub`` and ``client_id`` claims of the payload.
    """

    kind: ClassVar[GrantKind] = GrantKind.REFERENCE_TOKEN

    handle: str
    payload: dict[str, Any] = field(default_factory=dict)
    issued_at: int = field(default_factory=lambda: int(time.time()))
    lifetime: int = 3600

    @property
    def key(self):
        return self.handle

    @property
    def subject_id(self):
        return self.payload.get("sub")

    @property
    def client_id(self):
        return self.payload.get("client_id")


GRANT_CLASSES = {
    GrantKind.AUTHORIZATION_CODE: AuthorizationCode,
    GrantKind.REFRESH_TOKEN: RefreshToken,
    GrantKind.REFERENCE_TOKEN: ReferenceToken,
}
