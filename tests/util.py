from joserfc import jwt
from joserfc.jwk import OctKey

from idpsession.oauth2.rfc6749 import ClientMetadataMixin

SERVER_SECRET = "server-signing-secret-used-only-by-the-test-suite-0123456789"
COOKIE_SECRET = "cookie-signing-secret-used-only-by-the-test-suite-9876543210"


def get_server_key():
    return OctKey.import_key(SERVER_SECRET)


def create_id_token(claims, key=None):
    """Create a signed ID token for testing."""
    header = {"alg": "HS256"}
    return jwt.encode(header, claims, key or get_server_key())


class Client(ClientMetadataMixin):
    def __init__(self, client_id, **metadata):
        self.client_id = client_id
        self._client_metadata = metadata

    @property
    def client_metadata(self):
        return self._client_metadata
