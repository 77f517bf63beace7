"""idpsession.oidc.rpinitiated
~~~~~~~~~~~~~~~~~~~~~~~~~~~~

OpenID Connect RP-Initiated Logout 1.0 request validation, plus the
discovery and registration metadata shared with Front-Channel Logout 1.0.

https://openid.net/specs/openid-connect-rpinitiated-1_0.html
"""

from .discovery import OpenIDProviderMetadata
from .end_session import EndSessionRequest
from .end_session import EndSessionRequestValidator
from .registration import ClientMetadata

__all__ = [
    "EndSessionRequest",
    "EndSessionRequestValidator",
    "ClientMetadata",
    "OpenIDProviderMetadata",
]
