"""idpsession.oauth2.rfc6749.models
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

This module defines how to construct the client model the end session
and authorization validators read from. The client registry itself is
an external collaborator, reached through a ``query_client`` callable.
"""


class ClientMixin:
    """Implementation of the client model used by the logout fan-out and
    by PKCE enforcement. Framework integrations mix it into their own
    client class, e.g. a SQLAlchemy model holding a JSON metadata column.
    """

    def get_client_id(self):
        """A method to return client_id of the client. For instance, the value
        in database is saved in a column called ``client_id``::

            def get_client_id(self):
                return self.client_id

        :return: string
        """
        raise NotImplementedError()

    def get_logout_uri(self):
        """Front-channel logout URI of the client, or ``None`` when the
        client does not take part in front-channel logout.
        """
        raise NotImplementedError()

    def is_logout_session_required(self):
        """Whether ``sid`` and ``iss`` must be attached to the logout URI."""
        raise NotImplementedError()

    def get_post_logout_redirect_uris(self):
        """Registered ``post_logout_redirect_uris`` of the client."""
        raise NotImplementedError()

    def requires_pkce(self):
        return False

    def is_enabled(self):
        return True


class ClientMetadataMixin(ClientMixin):
    """Client backed by a ``client_metadata`` dict using the registration
    names of OpenID Connect Front-Channel Logout and RP-Initiated Logout.
    """

    client_id = None

    @property
    def client_metadata(self):
        raise NotImplementedError()

    def get_client_id(self):
        return self.client_id

    def get_logout_uri(self):
        return self.client_metadata.get("frontchannel_logout_uri")

    def is_logout_session_required(self):
        return bool(self.client_metadata.get("frontchannel_logout_session_required"))

    def get_post_logout_redirect_uris(self):
        return self.client_metadata.get("post_logout_redirect_uris", [])

    def requires_pkce(self):
        return bool(self.client_metadata.get("require_pkce"))

    def is_enabled(self):
        return self.client_metadata.get("enabled", True)
