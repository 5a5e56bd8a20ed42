"""Public stutter transform: line splitting and the per-line gate.

WHY: Role-play posts are often several lines long, each with its own quoted
dialogue. Lines must be handled in isolation so one unbalanced quote only
disables stuttering for its own line, and the original line breaks have to
survive byte for byte.

HOW: transform() resolves the settings, bails out early when no stutter is
possible, creates one random source for the whole call, then walks the text
splitting on ``\\n``, ``\\r\\n`` and lone ``\\r``. Each line goes through
transform_line(), which only invokes the tokenizer when the line has
balanced qualifying quotes.

RULES:
- Empty/None text or None settings → returned unchanged.
- The OFF preset → returned unchanged (even with always-stutter-first on).
- No stutter possible (chance <= 0 without always-first, or max repeats
  <= 0) → returned unchanged.
- Line break sequences are copied verbatim between transformed lines.
- One random source per call; draws run across lines in order.
- Never raises for any text or settings values.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from stutter_writer.core.quotes import has_quotes, transform_quoted_text
from stutter_writer.core.seed import UniformSource, create_rng
from stutter_writer.core.settings import (
    EffectiveSettings,
    StrengthPreset,
    StutterSettings,
    resolve_effective_settings,
)

logger = logging.getLogger(__name__)


def stutter_possible(effective: EffectiveSettings) -> bool:
    """False when the resolved settings can never produce a stutter."""
    if effective.strength_preset == StrengthPreset.OFF:
        return False
    if effective.word_stutter_chance <= 0.0 and not effective.always_stutter_first_word:
        return False
    return effective.max_repeats_per_word > 0


def transform_line(
    line: str,
    effective: EffectiveSettings,
    settings: StutterSettings,
    rng: UniformSource,
) -> str:
    """Transform a single line (no line breaks inside)."""
    found, balanced = has_quotes(line, settings.stutter_single_quotes)
    if not found:
        return line
    if not balanced:
        logger.debug("Skipping line with unbalanced quotes: %r", line)
        return line
    return transform_quoted_text(line, effective, settings.stutter_single_quotes, rng)


def transform(
    text: Optional[str],
    settings: Optional[StutterSettings],
    rng: Optional[UniformSource] = None,
) -> Optional[str]:
    """Apply stuttering to the quoted dialogue in ``text``.

    Args:
        text: Free-form input, possibly multi-line.
        settings: Raw settings record; None disables the transform.
        rng: Optional uniform source overriding create_rng(). Tests pass a
            fixed sequence here.

    Returns:
        The transformed text, or ``text`` itself when nothing can change.
    """
    if not text or settings is None:
        return text

    effective = resolve_effective_settings(settings)
    if not stutter_possible(effective):
        return text

    if rng is None:
        rng = create_rng(text, settings)

    parts: List[str] = []
    line_start = 0
    i = 0
    length = len(text)
    while i < length:
        ch = text[i]
        if ch == "\r" or ch == "\n":
            parts.append(transform_line(text[line_start:i], effective, settings, rng))
            if ch == "\r" and i + 1 < length and text[i + 1] == "\n":
                parts.append("\r\n")
                i += 1
            else:
                parts.append(ch)
            line_start = i + 1
        i += 1

    parts.append(transform_line(text[line_start:], effective, settings, rng))
    return "".join(parts)
