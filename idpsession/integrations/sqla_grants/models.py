from sqlalchemy import Column
from sqlalchemy import Integer
from sqlalchemy import String
from sqlalchemy import Text
from sqlalchemy import UniqueConstraint

from idpsession.common.encoding import json_dumps
from idpsession.common.encoding import json_loads
from idpsession.grants.models import GRANT_CLASSES
from idpsession.grants.models import GrantKind


class PersistedGrantMixin:
    """Columns of a persisted grant row. Subclass it with your declarative
    base::

        class PersistedGrant(db.Model, PersistedGrantMixin):
            __tablename__ = "persisted_grant"

            id = db.Column(db.Integer, primary_key=True)
    """

    __table_args__ = (UniqueConstraint("kind", "key"),)

    kind = Column(String(32), nullable=False)
    key = Column(String(255), nullable=False, index=True)
    subject_id = Column(String(255), index=True)
    client_id = Column(String(255), index=True)
    data = Column(Text, nullable=False, default="{}")
    issued_at = Column(Integer, nullable=False, default=0)
    lifetime = Column(Integer, nullable=False, default=0)

    def get_grant(self):
        cls = GRANT_CLASSES[GrantKind(self.kind)]
        return cls.from_dict(json_loads(self.data))

    def set_grant(self, grant):
        self.kind = grant.kind.value
        self.subject_id = grant.subject_id
        self.client_id = grant.client_id
        self.issued_at = grant.issued_at
        self.lifetime = grant.lifetime
        self.data = json_dumps(grant.to_dict())
