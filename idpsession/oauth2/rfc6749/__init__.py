"""idpsession.oauth2.rfc6749
~~~~~~~~~~~~~~~~~~~~~~~~~~

The pieces of The OAuth 2.0 Authorization Framework the identity provider
core builds on: requests, errors, client model and endpoint base.

https://tools.ietf.org/html/rfc6749
"""

from .endpoint import Endpoint
from .endpoint import EndpointRequest
from .errors import InvalidRequestError
from .errors import OAuth2Error
from .errors import UnsupportedResponseTypeError
from .models import ClientMetadataMixin
from .models import ClientMixin
from .requests import BasicOAuth2Payload
from .requests import OAuth2Payload
from .requests import OAuth2Request

__all__ = [
    "OAuth2Payload",
    "BasicOAuth2Payload",
    "OAuth2Request",
    "OAuth2Error",
    "InvalidRequestError",
    "UnsupportedResponseTypeError",
    "ClientMixin",
    "ClientMetadataMixin",
    "Endpoint",
    "EndpointRequest",
]
