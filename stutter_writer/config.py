"""Configuration constants and .env loading.

WHY: The chat length limit, the default chat mode and the locations of the
settings and draft files differ between users and setups. They belong in
the environment (or a .env file), not in the code.

HOW: python-dotenv loads the .env file on import. Constants are read from
os.environ with sensible defaults. load_max_chat_chars() validates the one
numeric value and gives a clear error when it is malformed.

RULES:
- STUTTER_MAX_CHAT_CHARS: positive integer, default 500
- STUTTER_CHAT_MODE: chat header prefixed to messages, default "/em";
  "none" (any case) or an empty value disables the header
- STUTTER_SETTINGS_FILE: optional path to a JSON settings file
- STUTTER_DRAFT_FILE: draft path, default "stutter-writer-draft.txt"
- Never raises on import; only load_max_chat_chars() validates
"""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv

# Load .env from the working directory (where the tool is run from)
load_dotenv()

CHAT_MODES = ("/s", "/p", "/em")
"""Chat channels the header selector knows about (say, party, emote)."""

DEFAULT_MAX_CHAT_CHARS = 500
MAX_TEXT_CHARS = 200_000
"""Inputs longer than this are rejected by the CLI."""

DEFAULT_CHAT_MODE = os.getenv("STUTTER_CHAT_MODE", "/em")
DEFAULT_SETTINGS_PATH = os.getenv("STUTTER_SETTINGS_FILE") or None
DEFAULT_DRAFT_PATH = os.getenv("STUTTER_DRAFT_FILE", "stutter-writer-draft.txt")


def load_max_chat_chars() -> int:
    """Read the chat message limit from the environment.

    RULES:
    - Missing or blank → DEFAULT_MAX_CHAT_CHARS
    - Raises ValueError for non-integers and values below 1
    """
    raw = os.getenv("STUTTER_MAX_CHAT_CHARS", "").strip()
    if not raw:
        return DEFAULT_MAX_CHAT_CHARS
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(
            "STUTTER_MAX_CHAT_CHARS must be an integer, got '{}'.".format(raw)
        ) from None
    if value < 1:
        raise ValueError(
            "STUTTER_MAX_CHAT_CHARS must be at least 1, got {}.".format(value)
        )
    return value


def normalize_chat_mode(mode: Optional[str]) -> Optional[str]:
    """Map "none"/blank to None, otherwise return the stripped header."""
    if mode is None:
        return None
    mode = mode.strip()
    if not mode or mode.lower() == "none":
        return None
    return mode
