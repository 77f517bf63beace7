"""Client-held session state.

The browser keeps two cookies for the provider: the session id of the
current authentication session and the list of clients that joined it.
:class:`SessionState` is the per-request view of both; reading and writing
the cookies is delegated to :class:`SessionCookieCodec`, which signs them
as compact JWTs so tampered values are read as absent.
"""

from __future__ import annotations

import logging

from joserfc import jwt
from joserfc.errors import JoseError
from joserfc.jwk import OctKey

from .options import EndSessionOptions

log = logging.getLogger(__name__)


class SessionState:
    def __init__(self, session_id=None, client_ids=(), max_clients=50):
        self._session_id = session_id
        self._client_ids = list(dict.fromkeys(client_ids))
        self.max_clients = max_clients

        self.session_id_modified = False
        self.clients_modified = False

    def get_session_id(self) -> str | None:
        return self._session_id

    def set_session_id(self, session_id: str):
        self._session_id = session_id
        self.session_id_modified = True

    def clear_session_id(self):
        self._session_id = None
        self.session_id_modified = True

    def get_clients(self) -> list[str]:
        return list(self._client_ids)

    def add_client(self, client_id: str):
        """Record that ``client_id`` joined the session. The list is bounded,
        the oldest entries are dropped first.
        """
        if client_id in self._client_ids:
            return
        self._client_ids.append(client_id)
        if len(self._client_ids) > self.max_clients:
            self._client_ids = self._client_ids[-self.max_clients :]
        self.clients_modified = True

    def clear_clients(self):
        self._client_ids = []
        self.clients_modified = True

    @property
    def is_cleared(self) -> bool:
        return self._session_id is None and not self._client_ids

    def __repr__(self):
        return f"<SessionState sid={self._session_id!r} clients={self._client_ids!r}>"


class SessionCookieCodec:
    """Signs and verifies the session cookies::

        codec = SessionCookieCodec(app.config["IDP_SESSION_SECRET_KEY"])
        state = codec.load(request.cookies)
        ...
        for name, value in codec.dump(state):
            if value is None:
                response.delete_cookie(name)
            else:
                response.set_cookie(name, value, secure=True, httponly=True)
    """

    ALGORITHM = "HS256"

    def __init__(self, key, options: EndSessionOptions | None = None):
        if not isinstance(key, OctKey):
            key = OctKey.import_key(key)
        self.key = key
        self.options = options or EndSessionOptions()

    def encode(self, claims: dict) -> str:
        return jwt.encode({"alg": self.ALGORITHM}, claims, self.key)

    def decode(self, value: str) -> dict | None:
        try:
            token = jwt.decode(value, self.key, algorithms=[self.ALGORITHM])
        except (JoseError, ValueError) as error:
            log.warning("Ignoring invalid session cookie: %s", error)
            return None
        return token.claims

    def load(self, cookies) -> SessionState:
        options = self.options
        session_id = None
        client_ids = []

        value = cookies.get(options.session_cookie_name)
        if value:
            claims = self.decode(value)
            if claims:
                session_id = claims.get("sid")

        value = cookies.get(options.client_list_cookie_name)
        if value:
            claims = self.decode(value)
            if claims and isinstance(claims.get("clients"), list):
                client_ids = [c for c in claims["clients"] if isinstance(c, str)]

        return SessionState(session_id, client_ids, options.client_list_max_size)

    def dump(self, state: SessionState) -> list[tuple[str, str | None]]:
        """Return the cookies to write back as ``(name, value)`` pairs; a
        ``None`` value means the cookie is deleted.
        """
        options = self.options
        cookies = []
        if state.session_id_modified:
            sid = state.get_session_id()
            value = self.encode({"sid": sid}) if sid else None
            cookies.append((options.session_cookie_name, value))

        if state.clients_modified:
            clients = state.get_clients()
            value = self.encode({"clients": clients}) if clients else None
            cookies.append((options.client_list_cookie_name, value))
        return cookies
