"""Tests for bearer-token authentication dependencies."""

import asyncio
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from apps.api.core import auth
from apps.api.core.errors import AuthenticationError


def run(coro):
    return asyncio.run(coro)


class TestGetUserToken:
    def test_extracts_bearer_token(self):
        assert run(auth.get_user_token("Bearer abc.def")) == "abc.def"

    @pytest.mark.parametrize("header", ["", "Token abc", "Bearer    "])
    def test_rejects_missing_token(self, header):
        with pytest.raises(AuthenticationError) as exc_info:
            run(auth.get_user_token(header))
        assert exc_info.value.status_code == 401


class TestGetCurrentUserId:
    def test_returns_user_id(self):
        client = MagicMock()
        client.auth.get_user.return_value = SimpleNamespace(user=SimpleNamespace(id="user-7"))
        assert run(auth.get_current_user_id(client)) == "user-7"

    def test_rejects_unknown_token(self):
        client = MagicMock()
        client.auth.get_user.return_value = SimpleNamespace(user=None)
        with pytest.raises(AuthenticationError) as exc_info:
            run(auth.get_current_user_id(client))
        assert exc_info.value.status_code == 401


def test_unconfigured_supabase_raises(monkeypatch):
    monkeypatch.setattr(auth.settings, "SUPABASE_URL", "")
    with pytest.raises(RuntimeError, match="SUPABASE_URL"):
        auth._get_supabase_url()
