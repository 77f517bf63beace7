"""
idpsession.oauth2.rfc6749.endpoint
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Base classes for provider endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from typing import Any

if TYPE_CHECKING:
    from .requests import OAuth2Request


@dataclass
class EndpointRequest:
    """Base class for validated endpoint requests.

    Validators return a subclass of this object carrying everything they
    resolved from the raw request.
    """

    request: OAuth2Request
    client: Any = None


class Endpoint:
    """Base class for provider endpoints.

    An endpoint turns an :class:`OAuth2Request` into a ``(status_code, body,
    headers)`` tuple which framework integrations translate into their own
    response objects.
    """

    #: Endpoint name used by integrations
    ENDPOINT_NAME: str | None = None

    def create_endpoint_response(self, request: OAuth2Request) -> tuple[int, Any, list]:
        """Process the request and return the response tuple.

        :param request: The OAuth2Request to process
        :returns: Tuple of (status_code, body, headers)
        """
        raise NotImplementedError()

    def __call__(self, request: OAuth2Request) -> tuple[int, Any, list]:
        return self.create_endpoint_response(request)
