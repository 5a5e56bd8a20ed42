"""Quote detection and the single-pass quoted-text tokenizer.

WHY: Stutters only belong in spoken dialogue, i.e. inside quotes. Narration
like ``/em she walks over and asks`` must come through untouched, and
apostrophes in ``don't`` or ``Mira's`` must not be mistaken for quote marks.

HOW: has_quotes() pre-scans a line to learn whether it contains qualifying
quotes and whether they pair up. transform_quoted_text() then walks the line
once with a two-state machine (outside / inside a quote), collecting word
tokens inside quotes and handing each finished token to apply_stutter()
together with a SegmentState that is reset whenever a quote opens.

RULES:
- ``"`` always opens/closes a quote; ``'`` only when single quotes are
  enabled and it is not an apostrophe between two letters.
- Only the opening character closes a quote (no nesting, no mixing).
- Lines without qualifying quotes, or with unbalanced quotes, are returned
  unchanged; there is never a partial transform.
- Inside a quote, letters and in-word apostrophes form words; any other
  character flushes the pending word and is copied verbatim.
- A ``/`` with no pending word suppresses stuttering of the next word.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from stutter_writer.core.seed import UniformSource
from stutter_writer.core.settings import EffectiveSettings, StutterMode
from stutter_writer.core.stutter import SegmentState, apply_stutter, is_stutter_prefix

DOUBLE_QUOTE = '"'
SINGLE_QUOTE = "'"


def is_apostrophe_in_word(text: str, index: int) -> bool:
    """True if the character at ``index`` sits between two letters."""
    if index <= 0 or index >= len(text) - 1:
        return False
    return text[index - 1].isalpha() and text[index + 1].isalpha()


def quote_char_at(text: str, index: int, allow_single_quotes: bool) -> Optional[str]:
    """Return the quote character at ``index`` if it qualifies, else None."""
    ch = text[index]
    if ch == DOUBLE_QUOTE:
        return ch
    if allow_single_quotes and ch == SINGLE_QUOTE and not is_apostrophe_in_word(text, index):
        return ch
    return None


def is_closing_quote(text: str, index: int, active_quote: str) -> bool:
    ch = text[index]
    if ch != active_quote:
        return False
    if active_quote == SINGLE_QUOTE and is_apostrophe_in_word(text, index):
        return False
    return True


def is_word_char(text: str, index: int) -> bool:
    ch = text[index]
    if ch.isalpha():
        return True
    return ch == SINGLE_QUOTE and is_apostrophe_in_word(text, index)


def has_quotes(text: str, allow_single_quotes: bool) -> Tuple[bool, bool]:
    """Scan a line for qualifying quotes.

    Returns:
        ``(found, balanced)``: whether any qualifying quote occurs, and
        whether every opened quote is closed by the same character.
    """
    found = False
    active: Optional[str] = None
    for i in range(len(text)):
        quote = quote_char_at(text, i, allow_single_quotes)
        if quote is None:
            continue
        found = True
        if active is None:
            active = quote
        elif active == quote:
            active = None
    return found, active is None


def transform_quoted_text(
    text: str,
    effective: EffectiveSettings,
    allow_single_quotes: bool,
    rng: UniformSource,
) -> str:
    """Stutter the words inside quoted spans of one line.

    The caller guarantees the line's quotes are balanced; see
    transform_line() in stutter_writer.core.transform.
    """
    out: List[str] = []
    word: List[str] = []
    state = SegmentState()
    active_quote: Optional[str] = None

    def flush_word() -> None:
        if not word:
            return
        token = "".join(word)
        already_stuttered = state.last_separator == "-" and is_stutter_prefix(
            state.last_word, token
        )
        is_repeated = state.last_word is not None and token.lower() == state.last_word.lower()
        can_repeat = (
            effective.mode == StutterMode.HARD
            or not state.last_word_stuttered
            or not is_repeated
        )
        result = apply_stutter(
            token,
            effective,
            rng,
            state,
            already_stuttered=already_stuttered,
            suppressed=state.suppress_next_word,
            can_repeat=can_repeat,
        )
        out.append(result.text)
        state.last_word = token
        state.last_word_stuttered = result.stuttered
        state.suppress_next_word = False
        word.clear()

    for i, ch in enumerate(text):
        if active_quote is None:
            quote = quote_char_at(text, i, allow_single_quotes)
            if quote is not None:
                active_quote = quote
                state.reset()
            out.append(ch)
            continue

        if is_closing_quote(text, i, active_quote):
            flush_word()
            active_quote = None
            out.append(ch)
            continue

        if ch == "/" and not word:
            state.suppress_next_word = True
            out.append(ch)
            continue

        if is_word_char(text, i):
            word.append(ch)
            continue

        flush_word()
        out.append(ch)
        state.last_separator = ch

    if active_quote is not None:
        flush_word()

    return "".join(out)
