"""Tests for secret bootstrap."""

import os
import uuid

import pytest

from playgate.secret import SecretBootstrapError, obtain_secret


class TestObtainSecret:
    def test_creates_secret_when_missing(self, tmp_path):
        path = tmp_path / "token.txt"
        secret = obtain_secret(str(path))
        assert path.read_text() == secret
        # a valid uuid
        assert str(uuid.UUID(secret)) == secret

    def test_second_call_returns_same_secret(self, tmp_path):
        path = str(tmp_path / "token.txt")
        first = obtain_secret(path)
        second = obtain_secret(path)
        assert first == second

    def test_existing_secret_is_trimmed(self, tmp_path):
        path = tmp_path / "token.txt"
        path.write_text("  3f9a2b7c-hand-written\n")
        assert obtain_secret(str(path)) == "3f9a2b7c-hand-written"

    def test_blank_file_is_regenerated(self, tmp_path):
        path = tmp_path / "token.txt"
        path.write_text("   \n")
        secret = obtain_secret(str(path))
        assert secret
        assert path.read_text() == secret

    def test_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "token.txt"
        secret = obtain_secret(str(path))
        assert path.read_text() == secret

    def test_new_file_is_owner_only(self, tmp_path):
        path = tmp_path / "token.txt"
        obtain_secret(str(path))
        assert os.stat(path).st_mode & 0o777 == 0o600

    def test_distinct_paths_get_distinct_secrets(self, tmp_path):
        a = obtain_secret(str(tmp_path / "a.txt"))
        b = obtain_secret(str(tmp_path / "b.txt"))
        assert a != b

    def test_unwritable_path_raises(self, tmp_path):
        # a directory can't be opened as the secret file
        with pytest.raises(SecretBootstrapError) as exc_info:
            obtain_secret(str(tmp_path))
        assert isinstance(exc_info.value.__cause__, OSError)
