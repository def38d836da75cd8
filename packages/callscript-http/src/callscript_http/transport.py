"""httpx transport that answers requests from an outcome sequencer."""

from __future__ import annotations

import logging
from collections.abc import Callable

import httpx

from callscript.errors import ConfigurationError
from callscript.sequencer import OutcomeSequencer

logger = logging.getLogger(__name__)

ResponseFactory = Callable[[httpx.Request], httpx.Response]

# The copy carries the decoded body, so these are recomputed rather than copied
_BODY_HEADERS = frozenset({"content-encoding", "content-length", "transfer-encoding"})


class SequencedTransport(httpx.MockTransport):
    """One scripted outcome per request, for both sync and async clients.

    Values are ``httpx.Response`` objects (copied per request, so a repeated
    outcome can be served many times) or callables taking the request.
    Templates must already be read, i.e. built with ``content=``, ``json=`` or
    ``text=`` rather than an unread ``stream=``.
    Failures are raised from the transport as configured, e.g.
    ``Fail(httpx.ConnectError("refused"))``.
    """

    def __init__(self, sequencer: OutcomeSequencer):
        self.sequencer = sequencer
        self.requests: list[httpx.Request] = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        logger.debug("%s %s (request #%d)", request.method, request.url, len(self.requests))

        value = self.sequencer.next()
        if isinstance(value, httpx.Response):
            return _copy_response(value, request)
        if callable(value):
            return value(request)
        raise ConfigurationError(
            f"SequencedTransport values must be httpx.Response or callables, "
            f"got {type(value).__name__}"
        )


def _copy_response(template: httpx.Response, request: httpx.Request) -> httpx.Response:
    return httpx.Response(
        status_code=template.status_code,
        headers=[
            (key, value)
            for key, value in template.headers.multi_items()
            if key.lower() not in _BODY_HEADERS
        ],
        content=template.content,
        request=request,
    )
