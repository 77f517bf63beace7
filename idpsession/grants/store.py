"""The persisted grant store contract.

One generic key-value interface serves the three grant kinds; a
``GrantKind`` discriminator keeps their key spaces apart. Every call is
atomic with respect to its key and either fully succeeds or raises
:class:`StoreUnavailableError`.
"""

from __future__ import annotations

import logging
import threading

from .models import GRANT_CLASSES
from .models import GrantKind
from .models import PersistedGrant

log = logging.getLogger(__name__)

#: kinds that support bulk removal by subject and client
BULK_REMOVABLE_KINDS = (GrantKind.REFRESH_TOKEN, GrantKind.REFERENCE_TOKEN)


def check_grant_kind(kind, value=None):
    kind = GrantKind(kind)
    if value is not None and not isinstance(value, GRANT_CLASSES[kind]):
        raise TypeError(
            f"{kind.value} store expects {GRANT_CLASSES[kind].__name__}, "
            f"got {type(value).__name__}"
        )
    return kind


class PersistedGrantStore:
    """Storage backend of persisted grants. Developers MUST implement the
    four ``_*`` hooks in subclass; the public methods validate arguments
    and keep the contract:

    - ``store`` overwrites an existing entry at the same key
    - ``get`` returns ``None`` for an unknown key
    - ``remove`` and ``remove_all`` succeed silently when nothing matches
    """

    def store(self, kind, key: str, value: PersistedGrant):
        kind = check_grant_kind(kind, value)
        if not key:
            raise ValueError("grant key is required")
        if value is None:
            raise ValueError("grant value is required")
        self._store(kind, key, value)

    def get(self, kind, key: str) -> PersistedGrant | None:
        kind = check_grant_kind(kind)
        if not key:
            return None
        return self._get(kind, key)

    def remove(self, kind, key: str):
        kind = check_grant_kind(kind)
        if not key:
            return
        self._remove(kind, key)

    def remove_all(self, kind, subject_id: str, client_id: str):
        kind = check_grant_kind(kind)
        if kind not in BULK_REMOVABLE_KINDS:
            raise ValueError(f"bulk removal is not supported for {kind.value}")
        self._remove_all(kind, subject_id, client_id)

    def _store(self, kind: GrantKind, key: str, value: PersistedGrant):
        raise NotImplementedError()

    def _get(self, kind: GrantKind, key: str) -> PersistedGrant | None:
        raise NotImplementedError()

    def _remove(self, kind: GrantKind, key: str):
        raise NotImplementedError()

    def _remove_all(self, kind: GrantKind, subject_id: str, client_id: str):
        raise NotImplementedError()


class MemoryGrantStore(PersistedGrantStore):
    """Process local store, mostly useful for tests and single process
    deployments. A lock serializes every call.
    """

    def __init__(self):
        self._grants: dict[tuple[GrantKind, str], PersistedGrant] = {}
        self._lock = threading.Lock()

    def _store(self, kind, key, value):
        with self._lock:
            self._grants[(kind, key)] = value

    def _get(self, kind, key):
        with self._lock:
            return self._grants.get((kind, key))

    def _remove(self, kind, key):
        with self._lock:
            self._grants.pop((kind, key), None)

    def _remove_all(self, kind, subject_id, client_id):
        with self._lock:
            matches = [
                k
                for k, grant in self._grants.items()
                if k[0] == kind
                and grant.subject_id == subject_id
                and grant.client_id == client_id
            ]
            for k in matches:
                del self._grants[k]
        log.debug(
            "Removed %d %s grants of subject %r for client %r",
            len(matches),
            kind.value,
            subject_id,
            client_id,
        )

    def __len__(self):
        return len(self._grants)
