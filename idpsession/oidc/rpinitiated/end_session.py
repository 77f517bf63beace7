"""OpenID Connect RP-Initiated Logout 1.0, request validation.

https://openid.net/specs/openid-connect-rpinitiated-1_0.html
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field
from typing import TYPE_CHECKING

from joserfc import jwt
from joserfc.errors import JoseError
from joserfc.jwk import KeySet

from idpsession.common.urls import add_params_to_uri
from idpsession.oauth2.rfc6749.endpoint import EndpointRequest
from idpsession.oauth2.rfc6749.errors import InvalidRequestError

if TYPE_CHECKING:
    from idpsession.oauth2.rfc6749.requests import OAuth2Request

log = logging.getLogger(__name__)


class _NonExpiringClaimsRegistry(jwt.JWTClaimsRegistry):
    """Claims registry that skips expiration validation."""

    # rpinitiated §2: "The OP SHOULD accept ID Tokens when the RP identified by the
    # ID Token's aud claim and/or sid claim has a current session or had a
    # recent session at the OP, even when the exp time has passed."
    def validate_exp(self, value: int) -> None:
        pass


@dataclass
class EndSessionRequest(EndpointRequest):
    """Validated end session request data."""

    id_token_claims: dict | None = field(default=None, repr=False)
    #: registered post logout redirect URI, ``state`` appended
    redirect_uri: str | None = None
    post_logout_redirect_uri: str | None = None
    state: str | None = None
    logout_hint: str | None = None
    ui_locales: str | None = None
    subject_id: str | None = None
    session_id: str | None = None

    @property
    def needs_confirmation(self) -> bool:
        """Whether user confirmation is recommended before logout."""

        # rpinitiated §6: "Logout requests without a valid id_token_hint value are a
        # potential means of denial of service; therefore, OPs should obtain
        # explicit confirmation from the End-User before acting upon them."
        return self.id_token_claims is None


class EndSessionRequestValidator:
    """Validates RP-Initiated Logout parameters against the current user.

    Example usage::

        class MyValidator(EndSessionRequestValidator):
            def get_server_jwks(self):
                return load_jwks()

            def get_client_by_id(self, client_id):
                return Client.query.filter_by(client_id=client_id).first()
    """

    def validate(self, request: OAuth2Request, subject_id=None) -> EndSessionRequest:
        """Validate an end session request.

        :param request: The OAuth2Request to validate
        :param subject_id: identifier of the authenticated user, if any
        :returns: EndSessionRequest with validated data
        :raises InvalidRequestError: If validation fails
        """
        data = request.payload.data

        id_token_hint = data.get("id_token_hint")
        client_id = data.get("client_id")
        post_logout_redirect_uri = data.get("post_logout_redirect_uri")
        state = data.get("state")

        # rpinitiated §2: "When an id_token_hint parameter is present, the OP MUST
        # validate that it was the issuer of the ID Token."
        id_token_claims = None
        if id_token_hint:
            id_token_claims = self._validate_id_token_hint(id_token_hint)

            # the hint must belong to the user being logged out
            sub = id_token_claims.get("sub")
            if subject_id is not None and sub != subject_id:
                raise InvalidRequestError("Current user does not match 'id_token_hint'")
            if subject_id is None:
                subject_id = sub

        client = None
        if client_id:
            client = self.get_client_by_id(client_id)
        elif id_token_claims:
            client = self.resolve_client_from_id_token_claims(id_token_claims)

        # rpinitiated §2: "When both client_id and id_token_hint are present, the OP
        # MUST verify that the Client Identifier matches the one used as the
        # audience of the ID Token."
        if client_id and id_token_claims:
            aud = id_token_claims.get("aud")
            aud_list = [aud] if isinstance(aud, str) else (aud or [])
            if client_id not in aud_list:
                raise InvalidRequestError("'client_id' does not match 'aud' claim")

        # rpinitiated §3: "The OP MUST NOT perform post-logout redirection if
        # the post_logout_redirect_uri value supplied does not exactly match
        # one of the previously registered post_logout_redirect_uris values."
        redirect_uri = None
        if (
            post_logout_redirect_uri
            and client
            and self._is_valid_post_logout_redirect_uri(
                client, post_logout_redirect_uri
            )
        ):
            redirect_uri = post_logout_redirect_uri
            # rpinitiated §3: "If the post_logout_redirect_uri value is provided
            # and the preceding conditions are met, the OP MUST include the
            # state value if the RP's initial Logout Request included state."
            if state:
                redirect_uri = add_params_to_uri(redirect_uri, {"state": state})
        else:
            if post_logout_redirect_uri:
                log.warning(
                    "Ignoring unregistered post_logout_redirect_uri %r",
                    post_logout_redirect_uri,
                )
            post_logout_redirect_uri = None

        session_id = None
        if request.session_state is not None:
            session_id = request.session_state.get_session_id()

        return EndSessionRequest(
            request=request,
            client=client,
            id_token_claims=id_token_claims,
            redirect_uri=redirect_uri,
            post_logout_redirect_uri=post_logout_redirect_uri,
            state=state,
            logout_hint=data.get("logout_hint"),
            ui_locales=data.get("ui_locales"),
            subject_id=subject_id,
            session_id=session_id,
        )

    def _validate_id_token_hint(self, id_token_hint: str) -> dict:
        """Validate that the OP was the issuer of the ID Token."""
        jwks = self.get_server_jwks()
        if isinstance(jwks, dict):
            jwks = KeySet.import_key_set(jwks)

        # rpinitiated §4: "When the OP detects errors in the RP-Initiated
        # Logout request, the OP MUST not perform post-logout redirection."
        try:
            token = jwt.decode(id_token_hint, jwks)
            claims_registry = _NonExpiringClaimsRegistry(nbf={"essential": False})
            claims_registry.validate(token.claims)
        except JoseError as exc:
            raise InvalidRequestError(exc.description) from exc
        except ValueError as exc:
            raise InvalidRequestError("Invalid 'id_token_hint'") from exc

        return dict(token.claims)

    def _is_valid_post_logout_redirect_uri(
        self, client, post_logout_redirect_uri: str
    ) -> bool:
        """Check if post_logout_redirect_uri is registered for the client."""
        registered_uris = client.get_post_logout_redirect_uris() or []
        return post_logout_redirect_uri in registered_uris

    def resolve_client_from_id_token_claims(self, id_token_claims: dict):
        """Resolve client from id_token aud claim.

        When aud is a single string, resolves the client directly.
        When aud is a list, returns None (ambiguous case).
        """
        aud = id_token_claims.get("aud")
        if isinstance(aud, str):
            return self.get_client_by_id(aud)
        return None

    def get_server_jwks(self):
        """Return the server's JSON Web Key Set for validating ID tokens.

        :returns: JWK Set (dict or KeySet) or a single key
        """
        raise NotImplementedError()

    def get_client_by_id(self, client_id: str):
        """Fetch a client by its client_id.

        :param client_id: The client identifier
        :returns: Client object or None
        """
        raise NotImplementedError()
