"""idpsession.oidc.endsession
~~~~~~~~~~~~~~~~~~~~~~~~~~~

End session endpoint with OpenID Connect Front-Channel Logout 1.0.

https://openid.net/specs/openid-connect-frontchannel-1_0.html
"""

from .endpoint import EndSessionEndpoint
from .endpoint import validate_sid
from .errors import EndSessionError
from .errors import MethodNotAllowedError
from .errors import NotFoundError
from .errors import SessionMismatchError
from .machine import EndSessionEvent
from .machine import EndSessionState
from .machine import RequestKind
from .machine import classify_request
from .machine import transition
from .messages import LogoutMessage
from .messages import LogoutMessageStore
from .messages import MemoryLogoutMessageStore
from .options import EndSessionOptions
from .results import EndSessionCallbackResult
from .results import EndSessionResult
from .results import ErrorResult
from .results import LogoutPageResult
from .state import SessionCookieCodec
from .state import SessionState

__all__ = [
    "EndSessionEndpoint",
    "EndSessionOptions",
    "validate_sid",
    "EndSessionError",
    "MethodNotAllowedError",
    "NotFoundError",
    "SessionMismatchError",
    "EndSessionState",
    "EndSessionEvent",
    "RequestKind",
    "classify_request",
    "transition",
    "LogoutMessage",
    "LogoutMessageStore",
    "MemoryLogoutMessageStore",
    "EndSessionResult",
    "LogoutPageResult",
    "EndSessionCallbackResult",
    "ErrorResult",
    "SessionState",
    "SessionCookieCodec",
]
