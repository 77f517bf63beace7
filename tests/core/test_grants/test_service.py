import pytest

from idpsession.grants import AuthorizationCode
from idpsession.grants import MemoryGrantStore
from idpsession.grants import PersistedGrantService
from idpsession.grants import PersistedGrantStore
from idpsession.grants import RefreshToken
from idpsession.grants import ReferenceToken
from idpsession.grants import StoreUnavailableError


@pytest.fixture
def service():
    return PersistedGrantService(MemoryGrantStore())


def test_authorization_code_single_use(service):
    code = AuthorizationCode(
        "c1",
        client_id="app1",
        subject_id="bob",
        request_data={"code_challenge": "abc", "code_challenge_method": "S256"},
    )
    service.store_authorization_code("c1", code)
    assert service.get_authorization_code("c1") is code

    consumed = service.consume_authorization_code("c1")
    assert consumed is code
    assert consumed.get_code_challenge() == "abc"
    assert consumed.get_code_challenge_method() == "S256"

    assert service.consume_authorization_code("c1") is None
    assert service.get_authorization_code("c1") is None


def test_remove_all_for_subject_and_client(service):
    service.store_refresh_token("h1", RefreshToken("h1", "bob", "app1"))
    service.store_reference_token(
        "h2", ReferenceToken("h2", payload={"sub": "bob", "client_id": "app1"})
    )

    service.remove_refresh_tokens("bob", "app1")
    service.remove_reference_tokens("bob", "app1")
    assert service.get_refresh_token("h1") is None
    assert service.get_reference_token("h2") is None

    service.remove_refresh_tokens("bob", "app1")
    service.remove_reference_tokens("bob", "app1")


def test_revoke_all(service):
    service.store_refresh_token("h1", RefreshToken("h1", "bob", "app1"))
    service.store_reference_token(
        "h2", ReferenceToken("h2", payload={"sub": "bob", "client_id": "app1"})
    )
    service.store_reference_token(
        "h3", ReferenceToken("h3", payload={"sub": "bob", "client_id": "app2"})
    )
    service.revoke_all("bob", "app1")
    assert service.get_refresh_token("h1") is None
    assert service.get_reference_token("h2") is None
    assert service.get_reference_token("h3") is not None


def test_remove_single_tokens(service):
    service.store_refresh_token("h1", RefreshToken("h1", "bob", "app1"))
    service.remove_refresh_token("h1")
    service.remove_refresh_token("h1")
    assert service.get_refresh_token("h1") is None

    service.store_reference_token("r1", ReferenceToken("r1"))
    service.remove_reference_token("r1")
    assert service.get_reference_token("r1") is None


def test_rotate_refresh_token(service):
    old = RefreshToken("old", "bob", "app1")
    service.store_refresh_token("old", old)

    new = RefreshToken("new", "bob", "app1")
    service.rotate_refresh_token("old", "new", new)
    assert service.get_refresh_token("old") is None
    assert service.get_refresh_token("new") is new


class BrokenStore(PersistedGrantStore):
    def _store(self, kind, key, value):
        raise StoreUnavailableError()

    def _get(self, kind, key):
        raise StoreUnavailableError()

    def _remove(self, kind, key):
        raise StoreUnavailableError()

    def _remove_all(self, kind, subject_id, client_id):
        raise StoreUnavailableError()


def test_store_errors_propagate():
    service = PersistedGrantService(BrokenStore())
    with pytest.raises(StoreUnavailableError):
        service.get_refresh_token("h1")

    # rotation stops after the failed removal
    with pytest.raises(StoreUnavailableError):
        service.rotate_refresh_token("old", "new", RefreshToken("new", "bob", "app1"))

    error = StoreUnavailableError()
    status, body, _ = error()
    assert status == 500
    assert body["error"] == "server_error"
