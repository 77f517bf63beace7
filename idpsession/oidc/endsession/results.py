from __future__ import annotations

import html

from idpsession.common.urls import add_params_to_uri
from idpsession.consts import default_html_headers

from .machine import EndSessionEvent
from .machine import EndSessionState


class EndSessionResult:
    #: event fired when this result is produced
    event: EndSessionEvent | None = None

    def __init__(self):
        self.state = EndSessionState.IDLE

    def __call__(self):
        """Render the result as ``(status_code, body, headers)``."""
        raise NotImplementedError()


class LogoutPageResult(EndSessionResult):
    """Redirects the user agent to the logout confirmation page, carrying
    the id of the stored :class:`LogoutMessage` when one was created.
    """

    event = EndSessionEvent.CONFIRMATION_ISSUED

    def __init__(self, logout_url, logout_id_parameter, logout_id=None):
        super().__init__()
        self.logout_url = logout_url
        self.logout_id_parameter = logout_id_parameter
        self.logout_id = logout_id

    def __call__(self):
        location = self.logout_url
        if self.logout_id:
            location = add_params_to_uri(
                location, [(self.logout_id_parameter, self.logout_id)]
            )
        return 302, "", [("Location", location)]


class EndSessionCallbackResult(EndSessionResult):
    """HTML page loading every front-channel logout URI in a hidden iframe."""

    event = EndSessionEvent.CALLBACK_COMPLETED

    def __init__(self, urls):
        super().__init__()
        self.urls = list(urls)

    def render_html(self):
        frames = "".join(
            f'<iframe src="{html.escape(url, quote=True)}"></iframe>'
            for url in self.urls
        )
        return (
            "<!DOCTYPE html><html><head>"
            "<style>iframe{display:none;width:0;height:0;}</style>"
            f"</head><body>{frames}</body></html>"
        )

    def __call__(self):
        return 200, self.render_html(), default_html_headers[:]


class ErrorResult(EndSessionResult):
    event = EndSessionEvent.REJECTED

    def __init__(self, error):
        super().__init__()
        self.error = error

    @property
    def status_code(self):
        return self.error.status_code

    def __call__(self):
        return self.error()
