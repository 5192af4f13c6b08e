"""
Request gate middleware.

Runs RequestGate on every request and turns redirect decisions into
307 responses. Allowed requests continue with the resolved identity on
``request.state.identity``.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import RedirectResponse
from starlette.status import HTTP_307_TEMPORARY_REDIRECT

from .. import dependencies

logger = logging.getLogger(__name__)


class GateMiddleware(BaseHTTPMiddleware):
    """
    Authentication and profile-completion middleware.

    The gate is looked up per request from the service container, which
    builds it once and then reuses it.
    """

    async def dispatch(self, request, call_next):
        try:
            gate = dependencies.get_request_gate()
            decision = await gate.evaluate(
                request.url.path,
                request.headers,
                request.url.query,
            )
        except Exception:
            # Gating errors never reach the user; the request goes on anonymous
            logger.exception(f"Request gate failed for {request.url.path}, allowing request")
            request.state.identity = None
            return await call_next(request)

        logger.debug(f"{request.method} {request.url.path}: {decision.action.value} ({decision.reason})")

        if decision.is_redirect:
            return RedirectResponse(decision.location, status_code=HTTP_307_TEMPORARY_REDIRECT)

        request.state.identity = decision.identity
        return await call_next(request)
