from idpsession.errors import IdpSessionHTTPError

__all__ = [
    "EndSessionError",
    "MethodNotAllowedError",
    "SessionMismatchError",
    "NotFoundError",
]


class EndSessionError(IdpSessionHTTPError):
    """Terminal failure of an end session or callback request."""


class MethodNotAllowedError(EndSessionError):
    error = "method_not_allowed"
    status_code = 405

    def __init__(self, allowed_methods=("GET",), **kwargs):
        super().__init__(**kwargs)
        self.allowed_methods = allowed_methods

    def get_error_description(self):
        return f"Allowed methods: {', '.join(self.allowed_methods)}"

    def get_headers(self):
        headers = super().get_headers()
        headers.append(("Allow", ", ".join(self.allowed_methods)))
        return headers


class SessionMismatchError(EndSessionError):
    """The ``sid`` query parameter is missing, the session cookie is
    missing, or they do not match.
    """

    error = "invalid_request"
    description = "Session id validation failed."
    status_code = 400


class NotFoundError(EndSessionError):
    error = "not_found"
    status_code = 404
