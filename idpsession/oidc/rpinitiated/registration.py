"""Client metadata for OpenID Connect RP-Initiated Logout 1.0 and
Front-Channel Logout 1.0.

https://openid.net/specs/openid-connect-rpinitiated-1_0.html
https://openid.net/specs/openid-connect-frontchannel-1_0.html
"""

from urllib import parse as urlparse

from joserfc.errors import InvalidClaimError

from idpsession.common.security import is_secure_transport
from idpsession.common.urls import is_valid_url


class ClientMetadata(dict):
    """Logout related client metadata, validated at registration time::

        metadata = ClientMetadata(request_json)
        metadata.validate()
        client.set_client_metadata(metadata)
    """

    REGISTERED_CLAIMS = [
        "post_logout_redirect_uris",
        "frontchannel_logout_uri",
        "frontchannel_logout_session_required",
    ]

    def __getattr__(self, key):
        if key in self.REGISTERED_CLAIMS:
            return self.get(key)
        raise AttributeError(key)

    def validate(self):
        self._validate_post_logout_redirect_uris()
        self._validate_frontchannel_logout_uri()
        self._validate_frontchannel_logout_session_required()

    def _validate_post_logout_redirect_uris(self):
        # rpinitiated §3.1: "post_logout_redirect_uris - Array of URLs supplied
        # by the RP to which it MAY request that the End-User's User Agent be
        # redirected using the post_logout_redirect_uri parameter after a
        # logout has been performed. These URLs SHOULD use the https scheme
        # [...]; however, they MAY use the http scheme, provided that the
        # Client Type is confidential."
        uris = self.get("post_logout_redirect_uris")
        if not uris:
            return

        is_public = self.get("token_endpoint_auth_method") == "none"

        for uri in uris:
            if not is_valid_url(uri):
                raise InvalidClaimError("post_logout_redirect_uris")

            if is_public and not is_secure_transport(uri):
                raise ValueError(
                    '"post_logout_redirect_uris" MUST use "https" scheme for public clients'
                )

    def _validate_frontchannel_logout_uri(self):
        # frontchannel §2: "The domain, port, and scheme of this URL MUST be
        # the same as that of a registered Redirection URI value."
        uri = self.get("frontchannel_logout_uri")
        if not uri:
            return

        if not is_valid_url(uri, fragments_allowed=False):
            raise InvalidClaimError("frontchannel_logout_uri")

        redirect_uris = self.get("redirect_uris")
        if redirect_uris:
            origin = _get_origin(uri)
            if not any(_get_origin(r) == origin for r in redirect_uris):
                raise InvalidClaimError("frontchannel_logout_uri")

    def _validate_frontchannel_logout_session_required(self):
        value = self.get("frontchannel_logout_session_required")
        if value is not None and not isinstance(value, bool):
            raise InvalidClaimError("frontchannel_logout_session_required")


def _get_origin(uri):
    parsed = urlparse.urlparse(uri)
    return parsed.scheme, parsed.hostname, parsed.port
