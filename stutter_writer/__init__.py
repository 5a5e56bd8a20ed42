"""Stutter Writer: stuttered dialogue for chat-length-limited role-play.

WHY: Role-players want a character's spoken lines to stutter ("C-can I have
a d-drink?") without hand-editing every word, and long posts have to be cut
into messages that fit the game's chat limit.

HOW: transform() stutters words inside quoted dialogue according to a
StutterSettings record; split_into_chunks() and build_chat_messages() cut
the result into numbered, boundary-respecting chat messages.

RULES:
- transform() and split_into_chunks() are pure and never raise.
- Text outside quotes is never modified.
- Same text + settings with stable_seed → same output, every run.
"""

from stutter_writer.core.chunker import (
    apply_chat_header,
    build_chat_messages,
    split_into_chunks,
)
from stutter_writer.core.settings import (
    PRESET_TABLE,
    EffectiveSettings,
    StrengthPreset,
    StutterMode,
    StutterSettings,
    preset_parameters,
    resolve_effective_settings,
)
from stutter_writer.core.transform import transform

__version__ = "0.1.0"

__all__ = [
    "transform",
    "split_into_chunks",
    "build_chat_messages",
    "apply_chat_header",
    "StutterSettings",
    "EffectiveSettings",
    "StrengthPreset",
    "StutterMode",
    "PRESET_TABLE",
    "preset_parameters",
    "resolve_effective_settings",
]
