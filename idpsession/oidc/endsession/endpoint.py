"""The end session endpoint.

Handles the RP-Initiated Logout request and the callback which fans the
logout out to every client of the session with front-channel logout.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from typing import Callable

from idpsession.common.security import compare_constant_time
from idpsession.common.security import generate_token
from idpsession.common.urls import add_params_to_uri
from idpsession.grants.errors import StoreUnavailableError
from idpsession.oauth2.rfc6749.endpoint import Endpoint
from idpsession.oauth2.rfc6749.errors import OAuth2Error

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
from .options import EndSessionOptions
from .results import EndSessionCallbackResult
from .results import EndSessionResult
from .results import ErrorResult
from .results import LogoutPageResult
from .state import SessionState

if TYPE_CHECKING:
    from idpsession.oauth2.rfc6749.requests import OAuth2Request
    from idpsession.oidc.rpinitiated import EndSessionRequestValidator

log = logging.getLogger(__name__)


def validate_sid(cookie_sid: str | None, query_sid: str | None) -> str | None:
    """Return ``query_sid`` when it matches the session cookie, else ``None``.
    The comparison runs in constant time.
    """
    if cookie_sid is None:
        log.error("No sid in cookie")
        return None
    if query_sid is None:
        log.error("No sid in query string")
        return None
    if compare_constant_time(query_sid, cookie_sid):
        log.debug("sid validation successful")
        return query_sid
    log.error("sid in query string does not match sid from cookie")
    return None


class EndSessionEndpoint(Endpoint):
    """OpenID Connect end session endpoint with front-channel logout.

    The signout request is validated by an
    :class:`~idpsession.oidc.rpinitiated.EndSessionRequestValidator`; when it
    names a client or a post logout redirect target, a
    :class:`LogoutMessage` is stored and the user agent is sent to the
    logout page with its id. After signing the user out, the logout page
    embeds the callback (see :meth:`create_callback_uri`), which renders one
    hidden iframe per participating client and clears the session cookies::

        endpoint = EndSessionEndpoint(
            validator=MyValidator(),
            message_store=MemoryLogoutMessageStore(),
            query_client=lambda client_id: Client.query.get(client_id),
        )
        status, body, headers = endpoint(request)
    """

    ENDPOINT_NAME = "end_session"

    SIGNOUT_METHODS = ("GET", "POST")
    CALLBACK_METHODS = ("GET",)

    def __init__(
        self,
        validator: EndSessionRequestValidator,
        message_store: LogoutMessageStore,
        query_client: Callable[[str], object],
        options: EndSessionOptions | None = None,
    ):
        self.validator = validator
        self.message_store = message_store
        self.query_client = query_client
        self.options = options or EndSessionOptions()

    def create_endpoint_response(self, request: OAuth2Request):
        return self.process_request(request)()

    def process_request(self, request: OAuth2Request) -> EndSessionResult:
        kind = classify_request(request.path, self.options)
        if kind is RequestKind.SIGNOUT:
            state = transition(EndSessionState.IDLE, EndSessionEvent.SIGNOUT_RECEIVED)
            handler = self.process_signout
        elif kind is RequestKind.CALLBACK:
            state = transition(EndSessionState.IDLE, EndSessionEvent.CALLBACK_RECEIVED)
            handler = self.process_signout_callback
        else:
            result = ErrorResult(NotFoundError())
            result.state = transition(
                EndSessionState.IDLE, EndSessionEvent.UNKNOWN_ROUTE
            )
            return result

        try:
            result = handler(request)
        except (EndSessionError, StoreUnavailableError) as error:
            result = ErrorResult(error)

        result.state = transition(state, result.event)
        return result

    def process_signout(self, request: OAuth2Request) -> LogoutPageResult:
        """Handle the RP-Initiated Logout request. Invalid requests are not
        rejected, they fall back to the logout page without a message.
        """
        if request.method not in self.SIGNOUT_METHODS:
            log.warning("Invalid HTTP method for end session endpoint.")
            raise MethodNotAllowedError(self.SIGNOUT_METHODS)

        log.info("Processing signout request")

        subject_id = self.get_current_subject(request)
        try:
            validated = self.validator.validate(request, subject_id)
        except OAuth2Error as error:
            log.info("End session request validation failed: %s", error)
            validated = None

        if validated is not None and (
            validated.client is not None or validated.redirect_uri is not None
        ):
            message_id = generate_token()
            message = LogoutMessage.from_end_session_request(message_id, validated)
            self.message_store.write(message_id, message)
            return self._create_logout_page_result(message_id)

        return self._create_logout_page_result()

    def process_signout_callback(self, request: OAuth2Request) -> EndSessionCallbackResult:
        """Handle the front-channel logout callback."""
        if request.method not in self.CALLBACK_METHODS:
            log.warning("Invalid HTTP method for end session callback endpoint.")
            raise MethodNotAllowedError(self.CALLBACK_METHODS)

        log.info("Processing signout callback request")

        self.clear_logout_message(request)

        session_state = self._get_session_state(request)
        sid = validate_sid(session_state.get_session_id(), request.args.get("sid"))
        if sid is None:
            raise SessionMismatchError()

        urls = self.get_client_end_session_urls(request, session_state, sid)

        session_state.clear_session_id()
        session_state.clear_clients()
        return EndSessionCallbackResult(urls)

    def clear_logout_message(self, request: OAuth2Request):
        logout_id = request.args.get(self.options.logout_id_parameter)
        if logout_id:
            self.message_store.delete(logout_id)

    def get_client_end_session_urls(self, request, session_state: SessionState, sid):
        issuer = None
        urls = []
        for client_id in session_state.get_clients():
            client = self.query_client(client_id)
            if client is None or not client.is_enabled():
                log.debug("Skipping unknown or disabled client %r", client_id)
                continue

            url = client.get_logout_uri()
            if not url:
                continue

            if client.is_logout_session_required():
                if issuer is None:
                    issuer = self.get_issuer_uri(request)
                url = add_params_to_uri(url, [("sid", sid), ("iss", issuer)])
            urls.append(url)

        if urls:
            log.debug("Client end session iframe URLs: %s", ", ".join(urls))
        else:
            log.debug("No client end session iframe URLs")
        return urls

    def get_logout_context(self, logout_id: str) -> LogoutMessage | None:
        """Read the pending logout context for the logout page."""
        if not logout_id:
            return None
        return self.message_store.read(logout_id)

    def create_callback_uri(self, logout_id=None, sid=None):
        """URI of the callback the logged out page loads in an iframe."""
        uri = self.options.end_session_callback_path
        if self.options.issuer:
            uri = self.options.issuer.rstrip("/") + uri
        params = []
        if logout_id:
            params.append((self.options.logout_id_parameter, logout_id))
        if sid:
            params.append(("sid", sid))
        if params:
            uri = add_params_to_uri(uri, params)
        return uri

    def get_issuer_uri(self, request: OAuth2Request) -> str:
        if self.options.issuer:
            return self.options.issuer
        return request.origin

    def get_current_subject(self, request: OAuth2Request):
        """Identifier of the authenticated user, ``None`` when anonymous."""
        return request.user

    def _get_session_state(self, request: OAuth2Request) -> SessionState:
        if request.session_state is None:
            request.session_state = SessionState(
                max_clients=self.options.client_list_max_size
            )
        return request.session_state

    def _create_logout_page_result(self, logout_id=None):
        return LogoutPageResult(
            self.options.logout_url, self.options.logout_id_parameter, logout_id
        )
