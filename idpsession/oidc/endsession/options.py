from __future__ import annotations

from dataclasses import dataclass


@dataclass
class EndSessionOptions:
    #: route of the RP-Initiated Logout request
    end_session_path: str = "/connect/endsession"
    #: route loaded by the logged out page to fan out front-channel logout
    end_session_callback_path: str = "/connect/endsession/callback"
    #: logout confirmation page of the login UI
    logout_url: str = "/account/logout"
    #: query parameter carrying the logout message id
    logout_id_parameter: str = "logoutId"
    session_cookie_name: str = "idp.session"
    client_list_cookie_name: str = "idp.clients"
    client_list_max_size: int = 50
    #: issuer identifier; the request origin is used when not set
    issuer: str | None = None
