"""Session check in front of protected routes."""

import logging
from collections.abc import Mapping

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from playgate.config import GuardPolicy
from playgate.sessions import SessionManager
from playgate.users import Identity

logger = logging.getLogger(__name__)


class RouteGuard(BaseHTTPMiddleware):
    """Reject requests to protected paths that don't carry a valid session.

    ``protected`` maps each path to the policy used when the check fails:
    a 401 or a redirect to the login page. Either way the route handler is
    never called. Admitted requests get the Identity on
    ``request.state.identity``.
    """

    def __init__(
        self,
        app,
        sessions: SessionManager,
        protected: Mapping[str, GuardPolicy],
        cookie_name: str,
        login_url: str = "/login",
    ) -> None:
        super().__init__(app)
        self._sessions = sessions
        self._protected = dict(protected)
        self._cookie_name = cookie_name
        self._login_url = login_url

    async def dispatch(self, request: Request, call_next):
        policy = self._protected.get(request.url.path)
        if policy is None:
            return await call_next(request)

        identity = self._sessions.validate(request.cookies.get(self._cookie_name))
        if identity is None:
            logger.info(
                "Rejected unauthenticated %s %s", request.method, request.url.path
            )
            if policy == GuardPolicy.REDIRECT:
                return RedirectResponse(url=self._login_url, status_code=302)
            return JSONResponse(
                {"detail": "Not authenticated"},
                status_code=status.HTTP_401_UNAUTHORIZED,
            )

        request.state.identity = identity
        return await call_next(request)


def current_identity(request: Request) -> Identity | None:
    """FastAPI dependency returning the identity admitted by the guard.

    None when authentication is disabled. A protected handler reached
    without passing the guard is a wiring error, reported as 401.
    """
    if not request.app.state.auth_enabled:
        return None
    identity = getattr(request.state, "identity", None)
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated"
        )
    return identity
