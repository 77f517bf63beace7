import logging

from sqlalchemy.exc import SQLAlchemyError

from idpsession.grants.errors import StoreUnavailableError
from idpsession.grants.store import PersistedGrantStore

log = logging.getLogger(__name__)


class SQLAlchemyGrantStore(PersistedGrantStore):
    """Grant store on a SQLAlchemy session. Each call commits on its own,
    failures are rolled back and raised as :class:`StoreUnavailableError`.
    """

    def __init__(self, session, grant_model):
        self.session = session
        self.grant_model = grant_model

    def _query(self, kind):
        return self.session.query(self.grant_model).filter_by(kind=kind.value)

    def _commit(self):
        try:
            self.session.commit()
        except SQLAlchemyError as error:
            self.session.rollback()
            log.error("Failed to commit persisted grant changes: %s", error)
            raise StoreUnavailableError() from error

    def _store(self, kind, key, value):
        try:
            item = self._query(kind).filter_by(key=key).first()
        except SQLAlchemyError as error:
            self.session.rollback()
            raise StoreUnavailableError() from error
        if item is None:
            item = self.grant_model(key=key)
            self.session.add(item)
        item.set_grant(value)
        self._commit()

    def _get(self, kind, key):
        try:
            item = self._query(kind).filter_by(key=key).first()
        except SQLAlchemyError as error:
            self.session.rollback()
            raise StoreUnavailableError() from error
        if item is None:
            return None
        return item.get_grant()

    def _remove(self, kind, key):
        try:
            self._query(kind).filter_by(key=key).delete()
        except SQLAlchemyError as error:
            self.session.rollback()
            raise StoreUnavailableError() from error
        self._commit()

    def _remove_all(self, kind, subject_id, client_id):
        try:
            count = (
                self._query(kind)
                .filter_by(subject_id=subject_id, client_id=client_id)
                .delete()
            )
        except SQLAlchemyError as error:
            self.session.rollback()
            raise StoreUnavailableError() from error
        self._commit()
        log.debug("Removed %d %s grants", count, kind.value)


def create_grant_store(session, grant_model):
    """Create a :class:`PersistedGrantStore` backed by ``grant_model``, a
    declarative model using :class:`PersistedGrantMixin`.
    """
    return SQLAlchemyGrantStore(session, grant_model)


def create_query_client_func(session, client_model):
    """Create a ``query_client`` function for the end session endpoint.

    :param session: SQLAlchemy session
    :param client_model: Client model class
    """

    def query_client(client_id):
        q = session.query(client_model)
        try:
            return q.filter_by(client_id=client_id).first()
        except SQLAlchemyError as error:
            session.rollback()
            log.error("Failed to load client %r: %s", client_id, error)
            raise StoreUnavailableError() from error

    return query_client
