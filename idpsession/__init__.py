"""idpsession
~~~~~~~~~~

Provider side building blocks of an OpenID Connect identity provider:
RP-Initiated and front-channel logout, the persisted grant store for
authorization codes, refresh tokens and reference tokens, and PKCE
validation of authorization requests.
"""

from .consts import author
from .consts import version

__version__ = version
__author__ = author
__license__ = "BSD-3-Clause"
