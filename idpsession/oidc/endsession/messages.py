from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass

log = logging.getLogger(__name__)


@dataclass
class LogoutMessage:
    """Pending logout context handed from the end session request to the
    logout confirmation page and the callback.
    """

    id: str
    session_id: str | None = None
    subject_id: str | None = None
    client_id: str | None = None
    post_logout_redirect_uri: str | None = None

    @classmethod
    def from_end_session_request(cls, message_id, end_session_request):
        client = end_session_request.client
        return cls(
            id=message_id,
            session_id=end_session_request.session_id,
            subject_id=end_session_request.subject_id,
            client_id=client.get_client_id() if client else None,
            post_logout_redirect_uri=end_session_request.redirect_uri,
        )


class LogoutMessageStore:
    """Ephemeral storage of :class:`LogoutMessage`. Developers can implement
    it on top of a cache::

        class CacheLogoutMessageStore(LogoutMessageStore):
            def write(self, message_id, message):
                cache.set(f"logout:{message_id}", message, timeout=600)

            def read(self, message_id):
                return cache.get(f"logout:{message_id}")

            def delete(self, message_id):
                cache.delete(f"logout:{message_id}")
    """

    def write(self, message_id: str, message: LogoutMessage):
        raise NotImplementedError()

    def read(self, message_id: str) -> LogoutMessage | None:
        raise NotImplementedError()

    def delete(self, message_id: str):
        """Delete a message. Deleting an unknown id is not an error."""
        raise NotImplementedError()


class MemoryLogoutMessageStore(LogoutMessageStore):
    def __init__(self, expires_in=600):
        self.expires_in = expires_in
        self._messages: dict[str, tuple[LogoutMessage, float]] = {}
        self._lock = threading.Lock()

    def write(self, message_id, message):
        now = time.time()
        with self._lock:
            self._purge_expired(now)
            self._messages[message_id] = (message, now + self.expires_in)

    def _purge_expired(self, now):
        expired = [k for k, (_, exp) in self._messages.items() if exp < now]
        for message_id in expired:
            del self._messages[message_id]
        if expired:
            log.debug("Purged %d expired logout messages", len(expired))

    def read(self, message_id):
        with self._lock:
            item = self._messages.get(message_id)
            if item is None:
                return None
            message, expires_at = item
            if expires_at < time.time():
                log.debug("Logout message %r expired", message_id)
                del self._messages[message_id]
                return None
            return message

    def delete(self, message_id):
        with self._lock:
            self._messages.pop(message_id, None)

    def __len__(self):
        return len(self._messages)
