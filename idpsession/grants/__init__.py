"""idpsession.grants
~~~~~~~~~~~~~~~~~

Storage contract for authorization codes, refresh tokens and reference
tokens.
"""

from .errors import StoreUnavailableError
from .models import AuthorizationCode
from .models import GrantKind
from .models import PersistedGrant
from .models import RefreshToken
from .models import ReferenceToken
from .models import generate_grant_key
from .service import PersistedGrantService
from .store import MemoryGrantStore
from .store import PersistedGrantStore

__all__ = [
    "GrantKind",
    "PersistedGrant",
    "AuthorizationCode",
    "RefreshToken",
    "ReferenceToken",
    "generate_grant_key",
    "PersistedGrantStore",
    "MemoryGrantStore",
    "PersistedGrantService",
    "StoreUnavailableError",
]
