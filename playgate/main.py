import html
import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from playgate.action import ActionInvoker
from playgate.auth import AuthenticationService, Credentials
from playgate.config import Settings
from playgate.guard import RouteGuard, current_identity
from playgate.secret import obtain_secret
from playgate.sessions import SessionManager
from playgate.users import Identity, provision_directory

logger = logging.getLogger(__name__)

PROTECTED_PATH = "/playpause"
LOGIN_PATH = "/login"

description = """
Toggles media playback on this machine over HTTP. Log in once with the
user id and the token from the secret file, then POST to /playpause.
"""

tags_metadata = [
    {
        "name": "auth",
        "description": "Login and logout.",
    },
    {
        "name": "media",
        "description": "The play/pause action. Requires a session.",
    },
]

_LOGIN_FORM = """<!doctype html>
<title>playgate login</title>
<form method="post" action="/login">
  <input name="user_id" placeholder="user id" autocomplete="username">
  <input name="token" type="password" placeholder="token" autocomplete="current-password">
  <button type="submit">Log in</button>
</form>
"""

_PLAYPAUSE_FORM = """<!doctype html>
<title>playgate</title>
<form method="post" action="/playpause">
  <button type="submit">Play / Pause</button>
</form>
<form method="post" action="/logout">
  <button type="submit">Log out</button>
</form>
"""


@lru_cache
def get_settings():
    return Settings()


def create_app(
    settings: Settings | None = None, invoker: ActionInvoker | None = None
) -> FastAPI:
    """Build the application.

    Bootstraps the secret and the user directory when authentication is
    enabled; a failure there raises SecretBootstrapError and the server
    never starts.
    """
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    invoker = invoker or ActionInvoker(settings.action_command, settings.action_timeout)

    app = FastAPI(
        title="playgate",
        description=description,
        summary="Authenticated media play/pause toggle.",
        version="0.1.0",
        openapi_tags=tags_metadata,
    )
    app.state.settings = settings
    app.state.invoker = invoker
    app.state.auth_enabled = settings.auth_enabled

    if settings.auth_enabled:
        secret = obtain_secret(settings.secret_file)
        directory, identity = provision_directory(secret, settings.user_id)
        sessions = SessionManager(directory)
        app.state.authenticator = AuthenticationService(directory)
        app.state.sessions = sessions
        app.add_middleware(
            RouteGuard,
            sessions=sessions,
            protected={PROTECTED_PATH: settings.guard_policy},
            cookie_name=settings.session_cookie,
            login_url=LOGIN_PATH,
        )
        logger.info(
            "Log in as user %s with the token in %s",
            identity.user_id,
            settings.secret_file,
        )
    else:
        logger.warning(
            "Authentication is disabled; %s is open to anyone who can reach %s:%d",
            PROTECTED_PATH,
            settings.host,
            settings.port,
        )

    _register_routes(app)
    return app


def _require_auth_enabled(request: Request) -> None:
    if not request.app.state.auth_enabled:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)


def _register_routes(app: FastAPI) -> None:
    @app.get("/health")
    def health(request: Request):
        return {"status": "ok", "auth": request.app.state.auth_enabled}

    @app.get(
        LOGIN_PATH,
        tags=["auth"],
        response_class=HTMLResponse,
        dependencies=[Depends(_require_auth_enabled)],
    )
    def login_page():
        return _LOGIN_FORM

    @app.post(LOGIN_PATH, tags=["auth"], dependencies=[Depends(_require_auth_enabled)])
    async def login(request: Request):
        form = await request.form()
        user_id = form.get("user_id")
        token = form.get("token")
        if not isinstance(user_id, str) or not isinstance(token, str):
            return JSONResponse(
                {"detail": "Invalid credentials"},
                status_code=status.HTTP_401_UNAUTHORIZED,
            )

        identity = request.app.state.authenticator.authenticate(
            Credentials(user_id=user_id.strip(), token=token)
        )
        if identity is None:
            return JSONResponse(
                {"detail": "Invalid credentials"},
                status_code=status.HTTP_401_UNAUTHORIZED,
            )

        # committed before any response goes out
        session_id = request.app.state.sessions.create_session(identity)

        settings = request.app.state.settings
        response = RedirectResponse(url=PROTECTED_PATH, status_code=302)
        response.set_cookie(
            key=settings.session_cookie,
            value=session_id,
            httponly=True,
            samesite="lax",
            path="/",
            secure=str(request.url).startswith("https"),
        )
        return response

    @app.post("/logout", tags=["auth"], dependencies=[Depends(_require_auth_enabled)])
    def logout(request: Request):
        settings = request.app.state.settings
        session_id = request.cookies.get(settings.session_cookie)
        if session_id:
            request.app.state.sessions.invalidate(session_id)
        response = RedirectResponse(url=LOGIN_PATH, status_code=302)
        response.delete_cookie(key=settings.session_cookie, path="/")
        return response

    @app.get(PROTECTED_PATH, tags=["media"], response_class=HTMLResponse)
    def playpause_page(
        identity: Annotated[Identity | None, Depends(current_identity)],
    ):
        return _PLAYPAUSE_FORM

    @app.post(PROTECTED_PATH, tags=["media"], response_class=HTMLResponse)
    async def playpause(
        request: Request,
        identity: Annotated[Identity | None, Depends(current_identity)],
    ):
        logger.info(
            "Play/pause requested by %s",
            identity.user_id if identity is not None else "anonymous",
        )
        succeeded, diagnostic = await request.app.state.invoker.invoke()
        if succeeded:
            return HTMLResponse("<h1>Media toggled!</h1>")
        return HTMLResponse(
            f"<h1>Failed to toggle media</h1><pre>{html.escape(diagnostic)}</pre>",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
