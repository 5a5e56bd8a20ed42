"""Unit tests for environment configuration."""

import pytest

from stutter_writer.config import (
    DEFAULT_MAX_CHAT_CHARS,
    load_max_chat_chars,
    normalize_chat_mode,
)


class TestMaxChatChars:

    def test_default(self, monkeypatch):
        monkeypatch.delenv("STUTTER_MAX_CHAT_CHARS", raising=False)
        assert load_max_chat_chars() == DEFAULT_MAX_CHAT_CHARS == 500

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("STUTTER_MAX_CHAT_CHARS", " 300 ")
        assert load_max_chat_chars() == 300

    def test_not_an_integer(self, monkeypatch):
        monkeypatch.setenv("STUTTER_MAX_CHAT_CHARS", "lots")
        with pytest.raises(ValueError, match="must be an integer"):
            load_max_chat_chars()

    def test_not_positive(self, monkeypatch):
        monkeypatch.setenv("STUTTER_MAX_CHAT_CHARS", "0")
        with pytest.raises(ValueError, match="at least 1"):
            load_max_chat_chars()


class TestChatMode:

    @pytest.mark.parametrize("value", [None, "", "  ", "none", "NONE"])
    def test_disabled(self, value):
        assert normalize_chat_mode(value) is None

    def test_kept(self):
        assert normalize_chat_mode(" /em ") == "/em"
