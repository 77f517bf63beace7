"""States of an end session interaction and the transitions between them.

A signout request moves from ``IDLE`` to ``VALIDATING_SIGNOUT`` and, once
the confirmation page is issued, to ``AWAITING_CALLBACK``. The callback
moves to ``PROCESSING_CALLBACK`` and finishes in ``COMPLETED``. Every
rejection (wrong method, sid mismatch, unknown route) ends in ``COMPLETED``.
"""

from __future__ import annotations

import enum

from .options import EndSessionOptions


class EndSessionState(enum.Enum):
    IDLE = "idle"
    VALIDATING_SIGNOUT = "validating_signout"
    AWAITING_CALLBACK = "awaiting_callback"
    PROCESSING_CALLBACK = "processing_callback"
    COMPLETED = "completed"


class EndSessionEvent(enum.Enum):
    SIGNOUT_RECEIVED = "signout_received"
    CALLBACK_RECEIVED = "callback_received"
    UNKNOWN_ROUTE = "unknown_route"
    CONFIRMATION_ISSUED = "confirmation_issued"
    CALLBACK_COMPLETED = "callback_completed"
    REJECTED = "rejected"


class RequestKind(enum.Enum):
    SIGNOUT = "signout"
    CALLBACK = "callback"
    UNKNOWN = "unknown"


_TRANSITIONS = {
    (EndSessionState.IDLE, EndSessionEvent.SIGNOUT_RECEIVED): EndSessionState.VALIDATING_SIGNOUT,
    (EndSessionState.IDLE, EndSessionEvent.CALLBACK_RECEIVED): EndSessionState.PROCESSING_CALLBACK,
    (EndSessionState.IDLE, EndSessionEvent.UNKNOWN_ROUTE): EndSessionState.COMPLETED,
    (EndSessionState.VALIDATING_SIGNOUT, EndSessionEvent.CONFIRMATION_ISSUED): EndSessionState.AWAITING_CALLBACK,
    (EndSessionState.VALIDATING_SIGNOUT, EndSessionEvent.REJECTED): EndSessionState.COMPLETED,
    (EndSessionState.AWAITING_CALLBACK, EndSessionEvent.CALLBACK_RECEIVED): EndSessionState.PROCESSING_CALLBACK,
    (EndSessionState.PROCESSING_CALLBACK, EndSessionEvent.CALLBACK_COMPLETED): EndSessionState.COMPLETED,
    (EndSessionState.PROCESSING_CALLBACK, EndSessionEvent.REJECTED): EndSessionState.COMPLETED,
}


def transition(state: EndSessionState, event: EndSessionEvent) -> EndSessionState:
    try:
        return _TRANSITIONS[(state, event)]
    except KeyError:
        raise ValueError(f"No transition from {state.name} on {event.name}") from None


def _ensure_leading_slash(path):
    if not path.startswith("/"):
        return "/" + path
    return path


def classify_request(path: str, options: EndSessionOptions) -> RequestKind:
    path = _ensure_leading_slash(path or "")
    if path == _ensure_leading_slash(options.end_session_path):
        return RequestKind.SIGNOUT
    if path == _ensure_leading_slash(options.end_session_callback_path):
        return RequestKind.CALLBACK
    return RequestKind.UNKNOWN
