from flask import Response
from flask import json
from flask import request as flask_req

from idpsession.oauth2.rfc6749 import OAuth2Request
from idpsession.oidc.endsession import EndSessionEndpoint
from idpsession.oidc.endsession import EndSessionOptions
from idpsession.oidc.endsession import MemoryLogoutMessageStore
from idpsession.oidc.endsession import SessionCookieCodec


_CONFIG_OPTIONS = {
    "IDP_ISSUER": "issuer",
    "IDP_END_SESSION_PATH": "end_session_path",
    "IDP_END_SESSION_CALLBACK_PATH": "end_session_callback_path",
    "IDP_LOGOUT_URL": "logout_url",
    "IDP_LOGOUT_ID_PARAMETER": "logout_id_parameter",
    "IDP_SESSION_COOKIE_NAME": "session_cookie_name",
    "IDP_CLIENT_LIST_COOKIE_NAME": "client_list_cookie_name",
}


class EndSessionServer:
    """Flask integration of the end session endpoint. Initialize it with
    the request validator and a client lookup::

        def query_client(client_id):
            return Client.query.filter_by(client_id=client_id).first()


        def current_subject():
            return session.get("user_id")


        server = EndSessionServer(
            app,
            validator=MyValidator(),
            query_client=query_client,
            current_subject=current_subject,
        )


        @app.route("/connect/endsession", methods=["GET", "POST"])
        @app.route("/connect/endsession/callback")
        def end_session():
            return server.create_endpoint_response()
    """

    def __init__(
        self,
        app=None,
        validator=None,
        query_client=None,
        current_subject=None,
        message_store=None,
    ):
        self.validator = validator
        self.query_client = query_client
        self.current_subject = current_subject
        self.message_store = message_store
        self.endpoint = None
        self.codec = None
        if app is not None:
            self.init_app(app)

    def init_app(self, app, validator=None, query_client=None, current_subject=None):
        if validator is not None:
            self.validator = validator
        if query_client is not None:
            self.query_client = query_client
        if current_subject is not None:
            self.current_subject = current_subject
        if self.message_store is None:
            self.message_store = MemoryLogoutMessageStore(
                app.config.get("IDP_LOGOUT_MESSAGE_EXPIRES_IN", 600)
            )

        options = EndSessionOptions()
        for key, attr in _CONFIG_OPTIONS.items():
            value = app.config.get(key)
            if value is not None:
                setattr(options, attr, value)

        secret_key = app.config.get("IDP_SESSION_SECRET_KEY") or app.secret_key
        if not secret_key:
            raise RuntimeError('Missing "IDP_SESSION_SECRET_KEY" configuration')

        self.codec = SessionCookieCodec(secret_key, options)
        self.endpoint = EndSessionEndpoint(
            validator=self.validator,
            message_store=self.message_store,
            query_client=self.query_client,
            options=options,
        )
        self.cookie_secure = app.config.get("IDP_SESSION_COOKIE_SECURE", True)

    def create_oauth2_request(self):
        req = OAuth2Request(
            flask_req.method,
            flask_req.url,
            flask_req.form.to_dict(flat=True),
            flask_req.headers,
        )
        req.session_state = self.codec.load(flask_req.cookies)
        if self.current_subject:
            req.user = self.current_subject()
        return req

    def handle_response(self, status_code, payload, headers):
        if isinstance(payload, dict):
            payload = json.dumps(payload)
        return Response(payload, status=status_code, headers=headers)

    def save_session_state(self, response, session_state):
        for name, value in self.codec.dump(session_state):
            if value is None:
                response.delete_cookie(name)
            else:
                response.set_cookie(
                    name,
                    value,
                    secure=self.cookie_secure,
                    httponly=True,
                    samesite="None" if self.cookie_secure else "Lax",
                )
        return response

    def create_endpoint_response(self):
        req = self.create_oauth2_request()
        status_code, payload, headers = self.endpoint(req)
        response = self.handle_response(status_code, payload, headers)
        return self.save_session_state(response, req.session_state)

    def get_logout_context(self, logout_id):
        return self.endpoint.get_logout_context(logout_id)

    def create_callback_uri(self, logout_id=None, sid=None):
        return self.endpoint.create_callback_uri(logout_id, sid)
