from __future__ import annotations

import base64
import hashlib
import logging
from dataclasses import dataclass

from idpsession.common.encoding import to_bytes
from idpsession.common.encoding import to_unicode
from idpsession.common.security import compare_constant_time

from ..rfc6749 import InvalidRequestError
from ..rfc6749 import OAuth2Error
from ..rfc6749 import UnsupportedResponseTypeError

log = logging.getLogger(__name__)

#: response types an authorization endpoint understands, grouped by
#: whether they issue an authorization code
CODE_RESPONSE_TYPES = {
    "code",
    "code id_token",
    "code token",
    "code id_token token",
}
IMPLICIT_RESPONSE_TYPES = {
    "id_token",
    "token",
    "id_token token",
}


@dataclass
class InputLengthRestrictions:
    code_challenge_min_length: int = 43
    code_challenge_max_length: int = 128


def normalize_response_type(response_type: str | None) -> str:
    """Order-insensitive form of a space separated ``response_type``."""
    if not response_type:
        return ""
    # "code" leads, then "id_token", then "token"
    order = {"code": 0, "id_token": 1, "token": 2}
    return " ".join(sorted(response_type.split(), key=lambda v: order.get(v, 3)))


def create_s256_code_challenge(code_verifier):
    """Create S256 code_challenge with the given code_verifier."""
    data = hashlib.sha256(to_bytes(code_verifier, "ascii")).digest()
    return to_unicode(base64.urlsafe_b64encode(data).rstrip(b"="))


def compare_plain_code_challenge(code_verifier, code_challenge):
    return compare_constant_time(code_verifier, code_challenge)


def compare_s256_code_challenge(code_verifier, code_challenge):
    return compare_constant_time(
        create_s256_code_challenge(code_verifier), code_challenge
    )


class CodeChallenge:
    """Validates the ``code_challenge`` of an authorization request
    according to RFC7636.

    PKCE is enforced when ``required`` is set, when the client asks for it
    via :meth:`ClientMixin.requires_pkce`, or when the normalized response
    type is listed in ``required_response_types``. Requests that never
    yield an authorization code skip validation::

        challenge = CodeChallenge(required_response_types={"code id_token"})
        method, challenge = challenge.validate(request.payload.data, client)
    """

    #: defaults to "plain" if not present in the request
    DEFAULT_CODE_CHALLENGE_METHOD = "plain"
    #: supported ``code_challenge_method``
    SUPPORTED_CODE_CHALLENGE_METHOD = ["plain", "S256"]

    CODE_CHALLENGE_METHODS = {
        "plain": compare_plain_code_challenge,
        "S256": compare_s256_code_challenge,
    }

    def __init__(self, required=False, required_response_types=(), lengths=None):
        self.required = required
        self.required_response_types = {
            normalize_response_type(r) for r in required_response_types
        }
        self.lengths = lengths or InputLengthRestrictions()

    def is_required(self, response_type, client=None):
        if self.required:
            return True
        if client is not None and client.requires_pkce():
            return True
        return response_type in self.required_response_types

    def validate(self, data, client=None):
        """Validate the challenge parameters of an authorization request.

        :param data: dict of request parameters
        :param client: resolved client, if any
        :returns: tuple of ``(code_challenge, code_challenge_method)``, both
            ``None`` when the flow does not issue a code
        :raises OAuth2Error: on an invalid request
        """
        if not data.get("response_type"):
            raise InvalidRequestError("Missing 'response_type' parameter")

        response_type = normalize_response_type(data.get("response_type"))
        if response_type in IMPLICIT_RESPONSE_TYPES:
            return None, None
        if response_type not in CODE_RESPONSE_TYPES:
            raise UnsupportedResponseTypeError(data.get("response_type"))

        challenge = data.get("code_challenge")
        if not challenge:
            if self.is_required(response_type, client):
                raise InvalidRequestError("code challenge required")
            return None, None

        lengths = self.lengths
        if not (
            lengths.code_challenge_min_length
            <= len(challenge)
            <= lengths.code_challenge_max_length
        ):
            raise InvalidRequestError("invalid code challenge")

        method = data.get("code_challenge_method")
        if not method:
            log.debug("Missing code_challenge_method, defaulting to plain")
            method = self.DEFAULT_CODE_CHALLENGE_METHOD

        if method not in self.SUPPORTED_CODE_CHALLENGE_METHOD:
            raise InvalidRequestError("transform algorithm not supported")

        return challenge, method

    def verify_code_verifier(self, code_verifier, code_challenge, method=None):
        """Check a ``code_verifier`` presented on redemption against the
        challenge stored with the authorization code.
        """
        if not code_verifier or not code_challenge:
            return False
        method = method or self.DEFAULT_CODE_CHALLENGE_METHOD
        func = self.CODE_CHALLENGE_METHODS.get(method)
        if not func:
            return False
        return func(code_verifier, code_challenge)


@dataclass
class AuthorizeValidationResult:
    error: str | None = None
    error_description: str | None = None
    code_challenge: str | None = None
    code_challenge_method: str | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None


def validate_authorize_request(
    params, client=None, require_pkce=False, lengths=None, required_response_types=()
) -> AuthorizeValidationResult:
    """Validate the PKCE parameters of an authorization request. Errors are
    reported through the returned :class:`AuthorizeValidationResult`, this
    function never raises ``OAuth2Error``.
    """
    challenge = CodeChallenge(
        required=require_pkce,
        required_response_types=required_response_types,
        lengths=lengths,
    )
    try:
        code_challenge, method = challenge.validate(params, client)
    except OAuth2Error as error:
        log.debug("Authorize request rejected: %s", error)
        return AuthorizeValidationResult(
            error=error.error,
            error_description=error.get_error_description(),
        )
    return AuthorizeValidationResult(
        code_challenge=code_challenge,
        code_challenge_method=method,
    )


def verify_code_verifier(code_verifier, code_challenge, method=None):
    return CodeChallenge().verify_code_verifier(code_verifier, code_challenge, method)
