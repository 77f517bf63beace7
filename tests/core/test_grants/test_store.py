import threading

import pytest

from idpsession.grants import AuthorizationCode
from idpsession.grants import GrantKind
from idpsession.grants import MemoryGrantStore
from idpsession.grants import RefreshToken
from idpsession.grants import ReferenceToken
from idpsession.grants import generate_grant_key


@pytest.fixture
def store():
    return MemoryGrantStore()


def test_store_and_get(store):
    token = RefreshToken("h1", subject_id="bob", client_id="app1")
    store.store(GrantKind.REFRESH_TOKEN, "h1", token)
    assert store.get(GrantKind.REFRESH_TOKEN, "h1") is token
    assert store.get("refresh_token", "h1") is token


def test_store_overwrites(store):
    store.store("refresh_token", "h1", RefreshToken("h1", "bob", "app1"))
    replaced = RefreshToken("h1", "alice", "app1")
    store.store("refresh_token", "h1", replaced)
    assert store.get("refresh_token", "h1") is replaced
    assert len(store) == 1


def test_kinds_are_separate_key_spaces(store):
    store.store("refresh_token", "k", RefreshToken("k", "bob", "app1"))
    assert store.get("reference_token", "k") is None
    assert store.get("authorization_code", "k") is None


def test_get_unknown_key(store):
    assert store.get("authorization_code", "missing") is None
    assert store.get("authorization_code", "") is None


def test_remove_is_idempotent(store):
    code = AuthorizationCode("c1", client_id="app1", subject_id="bob")
    store.store("authorization_code", "c1", code)
    store.remove("authorization_code", "c1")
    assert store.get("authorization_code", "c1") is None
    store.remove("authorization_code", "c1")
    store.remove("authorization_code", "never-existed")


def test_remove_all(store):
    store.store("refresh_token", "h1", RefreshToken("h1", "bob", "app1"))
    store.store("refresh_token", "h2", RefreshToken("h2", "bob", "app2"))
    store.store("refresh_token", "h3", RefreshToken("h3", "alice", "app1"))
    store.store(
        "reference_token",
        "r1",
        ReferenceToken("r1", payload={"sub": "bob", "client_id": "app1"}),
    )

    store.remove_all("refresh_token", "bob", "app1")
    assert store.get("refresh_token", "h1") is None
    assert store.get("refresh_token", "h2") is not None
    assert store.get("refresh_token", "h3") is not None
    assert store.get("reference_token", "r1") is not None

    store.remove_all("refresh_token", "bob", "app1")
    store.remove_all("reference_token", "nobody", "none")


def test_remove_all_rejects_authorization_codes(store):
    with pytest.raises(ValueError):
        store.remove_all("authorization_code", "bob", "app1")


def test_value_must_match_kind(store):
    with pytest.raises(TypeError):
        store.store("refresh_token", "h1", ReferenceToken("h1"))
    with pytest.raises(ValueError):
        store.store("unknown", "h1", ReferenceToken("h1"))
    with pytest.raises(ValueError):
        store.store("reference_token", "", ReferenceToken(""))


def test_none_value_rejected(store):
    with pytest.raises(ValueError):
        store.store(GrantKind.REFRESH_TOKEN, "h1", None)
    assert len(store) == 0


def test_concurrent_writes_to_distinct_keys(store):
    def worker(n):
        for i in range(50):
            key = f"{n}-{i}"
            store.store("refresh_token", key, RefreshToken(key, "bob", "app1"))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(store) == 200

    store.remove_all("refresh_token", "bob", "app1")
    assert len(store) == 0


def test_grant_expiry_and_serialization():
    token = RefreshToken("h1", "bob", "app1", issued_at=1000, lifetime=60)
    assert token.get_expires_at() == 1060
    assert token.is_expired(now=1061)
    assert not token.is_expired(now=1059)

    data = token.to_dict()
    assert data["handle"] == "h1"
    assert "kind" not in data
    assert RefreshToken.from_dict(data) == token

    ref = ReferenceToken("r1", payload={"sub": "bob", "client_id": "app1"})
    assert ref.key == "r1"
    assert ref.subject_id == "bob"
    assert ref.client_id == "app1"


def test_generate_grant_key():
    keys = {generate_grant_key() for _ in range(100)}
    assert len(keys) == 100
    assert all(len(k) == 64 for k in keys)
