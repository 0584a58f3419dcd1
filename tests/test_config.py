"""Tests for settings."""

from unittest.mock import patch

from playgate.config import GuardPolicy, Settings


class TestSettings:
    def test_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            s = Settings(_env_file=None)
        assert s.host == "0.0.0.0"
        assert s.port == 5000
        assert s.secret_file == "token.txt"
        assert s.user_id == ""
        assert s.auth_enabled is True
        assert s.guard_policy == GuardPolicy.REDIRECT
        assert s.action_command == ["xdotool", "key", "XF86AudioPlay"]

    def test_environment_overrides(self):
        env = {
            "PLAYGATE_PORT": "8080",
            "PLAYGATE_AUTH_ENABLED": "false",
            "PLAYGATE_GUARD_POLICY": "unauthorized",
            "PLAYGATE_ACTION_COMMAND": '["playerctl", "play-pause"]',
        }
        with patch.dict("os.environ", env, clear=True):
            s = Settings(_env_file=None)
        assert s.port == 8080
        assert s.auth_enabled is False
        assert s.guard_policy == GuardPolicy.UNAUTHORIZED
        assert s.action_command == ["playerctl", "play-pause"]

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env.private"
        env_file.write_text("PLAYGATE_SECRET_FILE=/var/lib/playgate/token.txt\n")
        with patch.dict("os.environ", {}, clear=True):
            s = Settings(_env_file=str(env_file))
        assert s.secret_file == "/var/lib/playgate/token.txt"
