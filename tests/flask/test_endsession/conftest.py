import pytest
from flask import Flask
from flask import session

from idpsession.integrations.flask_endsession import EndSessionServer
from idpsession.integrations.sqla_grants import create_query_client_func
from idpsession.oidc.rpinitiated import EndSessionRequestValidator
from tests.util import COOKIE_SECRET
from tests.util import get_server_key

from .models import Client
from .models import User


class MyValidator(EndSessionRequestValidator):
    def get_server_jwks(self):
        return get_server_key()

    def get_client_by_id(self, client_id):
        from .models import db

        return db.session.query(Client).filter_by(client_id=client_id).first()


@pytest.fixture
def app():
    app = Flask(__name__)
    app.debug = True
    app.testing = True
    app.secret_key = "testing"
    app.config.update(
        {
            "SQLALCHEMY_TRACK_MODIFICATIONS": False,
            "SQLALCHEMY_DATABASE_URI": "sqlite://",
            "IDP_ISSUER": "https://provider.test",
            "IDP_SESSION_SECRET_KEY": COOKIE_SECRET,
            "IDP_SESSION_COOKIE_SECURE": False,
        }
    )
    with app.app_context():
        yield app


@pytest.fixture
def db(app):
    from .models import db

    db.init_app(app)
    db.create_all()
    yield db
    db.drop_all()


@pytest.fixture
def test_client(app):
    return app.test_client()


@pytest.fixture(autouse=True)
def user(db):
    user = User(username="foo")
    db.session.add(user)
    db.session.commit()
    yield user
    db.session.delete(user)


@pytest.fixture
def clients(db):
    items = []
    for client_id, metadata in [
        (
            "client-a",
            {
                "redirect_uris": ["https://a.test/callback"],
                "post_logout_redirect_uris": ["https://a.test/logged-out"],
                "frontchannel_logout_uri": "https://a.test/logout",
                "frontchannel_logout_session_required": True,
            },
        ),
        (
            "client-b",
            {
                "redirect_uris": ["https://b.test/callback"],
            },
        ),
        (
            "client-c",
            {
                "redirect_uris": ["https://c.test/callback"],
                "frontchannel_logout_uri": "https://c.test/logout",
            },
        ),
    ]:
        client = Client(client_id=client_id)
        client.set_client_metadata(metadata)
        db.session.add(client)
        items.append(client)
    db.session.commit()
    yield items
    for client in items:
        db.session.delete(client)


@pytest.fixture
def server(app, db):
    def current_subject():
        return session.get("user_id")

    server = EndSessionServer(
        app,
        validator=MyValidator(),
        query_client=create_query_client_func(db.session, Client),
        current_subject=current_subject,
    )

    @app.route("/connect/endsession", methods=["GET", "POST", "PUT"])
    @app.route("/connect/endsession/callback", methods=["GET", "POST"])
    @app.route("/connect/unknown")
    def end_session():
        return server.create_endpoint_response()

    @app.route("/account/logout")
    def logout_page():
        from flask import request

        message = server.get_logout_context(request.args.get("logoutId"))
        if message is None:
            return "Logged out"
        return f"Logged out of {message.client_id}"

    @app.route("/login/<int:user_id>")
    def login(user_id):
        session["user_id"] = str(user_id)
        return "ok"

    return server
