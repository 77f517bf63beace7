from __future__ import annotations

import logging

from .models import AuthorizationCode
from .models import GrantKind
from .models import RefreshToken
from .models import ReferenceToken
from .store import PersistedGrantStore

log = logging.getLogger(__name__)


class PersistedGrantService:
    """Per-kind view over a :class:`PersistedGrantStore`, used by the flows
    that issue and redeem grants::

        service = PersistedGrantService(MemoryGrantStore())
        service.store_authorization_code(code.code, code)
        code = service.consume_authorization_code(presented_code)
    """

    def __init__(self, store: PersistedGrantStore):
        self.store = store

    # authorization codes

    def store_authorization_code(self, code: str, value: AuthorizationCode):
        self.store.store(GrantKind.AUTHORIZATION_CODE, code, value)

    def get_authorization_code(self, code: str) -> AuthorizationCode | None:
        return self.store.get(GrantKind.AUTHORIZATION_CODE, code)

    def remove_authorization_code(self, code: str):
        self.store.remove(GrantKind.AUTHORIZATION_CODE, code)

    def consume_authorization_code(self, code: str) -> AuthorizationCode | None:
        """Redeem a single use authorization code: read it, then remove it.

        The store does not enforce one time use by itself, it only
        guarantees a removed key cannot be read again.
        """
        value = self.get_authorization_code(code)
        if value is not None:
            self.remove_authorization_code(code)
        return value

    # refresh tokens

    def store_refresh_token(self, handle: str, value: RefreshToken):
        self.store.store(GrantKind.REFRESH_TOKEN, handle, value)

    def get_refresh_token(self, handle: str) -> RefreshToken | None:
        return self.store.get(GrantKind.REFRESH_TOKEN, handle)

    def remove_refresh_token(self, handle: str):
        self.store.remove(GrantKind.REFRESH_TOKEN, handle)

    def remove_refresh_tokens(self, subject_id: str, client_id: str):
        self.store.remove_all(GrantKind.REFRESH_TOKEN, subject_id, client_id)

    def rotate_refresh_token(self, old_handle: str, new_handle: str, value: RefreshToken):
        """Invalidate ``old_handle`` and store ``value`` under ``new_handle``.

        The two calls are not atomic as a pair: between them neither handle
        is usable, and a failure of the second call leaves the subject
        without a refresh token.
        """
        self.remove_refresh_token(old_handle)
        self.store_refresh_token(new_handle, value)

    # reference tokens

    def store_reference_token(self, handle: str, value: ReferenceToken):
        self.store.store(GrantKind.REFERENCE_TOKEN, handle, value)

    def get_reference_token(self, handle: str) -> ReferenceToken | None:
        return self.store.get(GrantKind.REFERENCE_TOKEN, handle)

    def remove_reference_token(self, handle: str):
        self.store.remove(GrantKind.REFERENCE_TOKEN, handle)

    def remove_reference_tokens(self, subject_id: str, client_id: str):
        self.store.remove_all(GrantKind.REFERENCE_TOKEN, subject_id, client_id)

    def revoke_all(self, subject_id: str, client_id: str):
        """Remove every refresh and reference token of ``subject_id`` issued to
        ``client_id``, e.g. when consent is withdrawn or the client disabled.
        """
        log.info("Revoking grants of subject %r for client %r", subject_id, client_id)
        self.remove_refresh_tokens(subject_id, client_id)
        self.remove_reference_tokens(subject_id, client_id)
