"""idpsession.oauth2.rfc7636
~~~~~~~~~~~~~~~~~~~~~~~~~~

This module represents a direct implementation of
Proof Key for Code Exchange by OAuth Public Clients.

https://tools.ietf.org/html/rfc7636
"""

from .challenge import AuthorizeValidationResult
from .challenge import CodeChallenge
from .challenge import InputLengthRestrictions
from .challenge import create_s256_code_challenge
from .challenge import validate_authorize_request
from .challenge import verify_code_verifier

__all__ = [
    "AuthorizeValidationResult",
    "CodeChallenge",
    "InputLengthRestrictions",
    "create_s256_code_challenge",
    "validate_authorize_request",
    "verify_code_verifier",
]
