from __future__ import annotations

from collections import defaultdict
from urllib import parse as urlparse

from idpsession.common.urls import url_decode


class OAuth2Payload:
    @property
    def data(self):
        raise NotImplementedError()

    @property
    def datalist(self) -> defaultdict[str, list]:
        raise NotImplementedError()

    @property
    def client_id(self) -> str:
        """The authorization server issues the registered client a client
        identifier -- a unique string representing the registration
        information provided by the client.
        """
        return self.data.get("client_id")

    @property
    def response_type(self) -> str:
        return self.data.get("response_type")

    @property
    def redirect_uri(self):
        return self.data.get("redirect_uri")

    @property
    def scope(self) -> str:
        return self.data.get("scope")

    @property
    def state(self):
        return self.data.get("state")


class BasicOAuth2Payload(OAuth2Payload):
    def __init__(self, payload):
        self._data = payload
        self._datalist = {key: [value] for key, value in payload.items()}

    @property
    def data(self):
        return self._data

    @property
    def datalist(self) -> defaultdict[str, list]:
        return self._datalist


class OAuth2Request:
    """Framework independent view of an incoming HTTP request.

    Parameters are read from the query string for ``GET`` and from the form
    body for ``POST``. Integrations attach the authenticated subject to
    :attr:`user` and the client-held cookie state to :attr:`session_state`.
    """

    def __init__(self, method: str, uri: str, body=None, headers=None):
        self.method = method.upper()
        self.uri = uri
        self.body = body or {}
        self.headers = headers or {}

        #: authenticated subject identifier, if any
        self.user = None
        #: :class:`~idpsession.oidc.endsession.SessionState` of the request
        self.session_state = None
        self.client = None

        if self.method == "GET":
            self.payload = BasicOAuth2Payload(self.args)
        elif self.method == "POST":
            self.payload = BasicOAuth2Payload(self.form)
        else:
            self.payload = BasicOAuth2Payload({})

    @property
    def args(self):
        query = urlparse.urlparse(self.uri).query
        return dict(url_decode(query))

    @property
    def form(self):
        return self.body

    @property
    def path(self):
        return urlparse.urlparse(self.uri).path

    @property
    def origin(self):
        parsed = urlparse.urlparse(self.uri)
        if not parsed.scheme or not parsed.netloc:
            return None
        return f"{parsed.scheme}://{parsed.netloc}"
