from .models import PersistedGrantMixin
from .store import SQLAlchemyGrantStore
from .store import create_grant_store
from .store import create_query_client_func

__all__ = [
    "PersistedGrantMixin",
    "SQLAlchemyGrantStore",
    "create_grant_store",
    "create_query_client_func",
]
