from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict


class GuardPolicy(str, Enum):
    """What the route guard does with a request that has no valid session."""

    REDIRECT = "redirect"
    UNAUTHORIZED = "unauthorized"


class Settings(BaseSettings):
    """Create the settings.

    Don't populate here. The variables are only declared to make life
    easier for IDE autocomplete. Populate in .env.shared -- or, if
    committing to source control, .env.private (which is in the
    .gitignore). Every field can also be set from the environment with a
    ``PLAYGATE_`` prefix, e.g. ``PLAYGATE_SECRET_FILE``.

    - secret_file: where the shared login token lives. Created on first start.
    - user_id: the identifier to log in with. Leave empty to get a fresh
      random one on every start (it is logged at startup).
    - auth_enabled: set to false only on a trusted network; the action is
      then reachable without logging in.
    """

    host: str = "0.0.0.0"
    port: int = 5000
    secret_file: str = "token.txt"
    user_id: str = ""
    auth_enabled: bool = True
    guard_policy: GuardPolicy = GuardPolicy.REDIRECT
    session_cookie: str = "playgate_session"
    action_command: list[str] = ["xdotool", "key", "XF86AudioPlay"]
    action_timeout: float = 5.0
    log_level: str = "INFO"
    model_config = SettingsConfigDict(
        # `.env.private` takes priority over `.env.shared`
        env_file=(".env.shared", ".env.private"),
        env_prefix="playgate_",
    )
