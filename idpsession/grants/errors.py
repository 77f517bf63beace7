from idpsession.errors import IdpSessionHTTPError


class StoreUnavailableError(IdpSessionHTTPError):
    """The backing store failed to complete an operation. The call may be
    retried by the caller, nothing in this library retries it.
    """

    error = "server_error"
    description = "The grant store is unavailable."
    status_code = 500
