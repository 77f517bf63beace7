"""idpsession.oauth2.rfc6749.errors
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Error kinds of the authorization and end session endpoints, following
https://tools.ietf.org/html/rfc6749#section-4.1.2.1
"""

from idpsession.errors import IdpSessionHTTPError

__all__ = [
    "OAuth2Error",
    "InvalidRequestError",
    "UnsupportedResponseTypeError",
]


class OAuth2Error(IdpSessionHTTPError):
    def __init__(self, description=None, uri=None, status_code=None, state=None):
        super().__init__(None, description, uri, status_code)
        self.state = state

    def get_body(self):
        error = super().get_body()
        if self.state:
            error.append(("state", self.state))
        return error


class InvalidRequestError(OAuth2Error):
    """The request is missing a required parameter, includes an
    unsupported parameter value (other than grant type),
    repeats a parameter, includes multiple credentials,
    utilizes more than one mechanism for authenticating the
    client, or is otherwise malformed.
    """

    error = "invalid_request"


class UnsupportedResponseTypeError(OAuth2Error):
    """The authorization server does not support obtaining
    an access token using this method.
    """

    error = "unsupported_response_type"

    def __init__(self, response_type, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.response_type = response_type

    def get_error_description(self):
        return f"response_type={self.response_type} is not supported"
