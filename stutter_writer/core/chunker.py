"""Split finished text into chat-sized chunks with optional ``(i/n)`` markers.

WHY: Game chat caps a single message (500 characters by default). Long
posts must be cut into several messages, and a reader should not see a
sentence or a word chopped in half when a nicer cut exists nearby.

HOW: chunk_length() picks the cut for the front of the remaining text:
the last sentence terminator if it is far enough into the window, otherwise
the last whitespace, otherwise a hard cut. split_into_chunks() repeats that
until the text is used up. When numbering is on and more than one chunk is
needed, the marker width is reserved and the original text is split again
against the reduced budget, so markers never push a chunk over the limit.
build_chat_messages() additionally reserves room for a chat-mode header
such as ``/em`` and prefixes it to every message.

RULES:
- Sentence terminators: ``.`` ``!`` ``?`` ``;``; the cut goes after them,
  and only counts if it lands at or after 60% of the budget.
- Whitespace cuts go before the whitespace; a cut at position 0 is ignored.
- Hard cuts are at least one character long so the loop always progresses.
- Chunks are stripped and never empty; leading whitespace is skipped
  between chunks.
- A single chunk never gets a marker.
- Budgets too small for a marker plus one character are split unnumbered.
- Lengths are counted in characters, not UTF-8 bytes.
"""

from __future__ import annotations

import logging
from typing import List, Optional

logger = logging.getLogger(__name__)

SENTENCE_TERMINATORS = frozenset(".!?;")
SENTENCE_CUT_RATIO = 0.6


def chunk_length(text: str, max_chars: int) -> int:
    """Length of the next chunk taken from the front of ``text``.

    Returns 0 when ``text`` is empty or whitespace only.
    """
    if not text or text.isspace():
        return 0
    if len(text) <= max_chars:
        return len(text)

    window = min(len(text), max_chars)
    last_space = -1
    last_sentence = -1
    for i in range(window):
        ch = text[i]
        if ch.isspace():
            last_space = i
        elif ch in SENTENCE_TERMINATORS:
            last_sentence = i + 1

    threshold = int(max_chars * SENTENCE_CUT_RATIO)
    if last_sentence > 0 and last_sentence >= threshold:
        return last_sentence
    if last_space > 0:
        return last_space
    return max(window, 1)


def _split(text: str, max_chars: int) -> List[str]:
    chunks: List[str] = []
    start = 0
    length = len(text)
    while start < length:
        size = chunk_length(text[start:], max_chars)
        if size <= 0:
            break
        chunk = text[start:start + size].strip()
        if chunk:
            chunks.append(chunk)
        start += size
        while start < length and text[start].isspace():
            start += 1
    return chunks


def _marker(index: int, total: int) -> str:
    return " ({}/{})".format(index, total)


def split_into_chunks(text: Optional[str], max_chars: int, numbered: bool = True) -> List[str]:
    """Split ``text`` into chunks of at most ``max_chars`` characters.

    Args:
        text: The finished (already stuttered) text.
        max_chars: Character budget per chunk, including any marker.
        numbered: Append `` (i/n)`` to each chunk when there is more than one.

    Returns:
        Ordered list of non-empty chunks; empty for blank input.
    """
    if not text or text.isspace():
        return []

    chunks = _split(text, max_chars)
    if not numbered or len(chunks) <= 1:
        return chunks

    # The re-split can need more chunks than the first pass (e.g. 9 -> 10),
    # which widens the marker, so reserve again until the count settles.
    total = len(chunks)
    while True:
        reserve = len(_marker(total, total))
        budget = max_chars - reserve
        if budget < 1:
            logger.debug(
                "Budget %d cannot hold marker width %d; leaving chunks unnumbered",
                max_chars, reserve,
            )
            return _split(text, max_chars)
        logger.debug(
            "Re-splitting %d chars with budget %d (marker width %d)",
            len(text), budget, reserve,
        )
        chunks = _split(text, budget)
        if len(str(len(chunks))) <= len(str(total)):
            break
        total = len(chunks)

    count = len(chunks)
    return [chunk + _marker(i + 1, count) for i, chunk in enumerate(chunks)]


def apply_chat_header(text: str, header: Optional[str]) -> str:
    """Prefix a chat-mode header (``/em``, ``/s`` ...) unless already present."""
    if not header or not header.strip():
        return text
    if text.lower().startswith(header.lower()):
        return text
    return "{} {}".format(header, text)


def build_chat_messages(
    text: Optional[str],
    max_chars: int,
    header: Optional[str] = None,
    numbered: bool = True,
) -> List[str]:
    """Split ``text`` into ready-to-send chat messages.

    The header width (plus one space) is taken out of the budget before
    splitting, so every returned message fits in ``max_chars``.
    """
    budget = max_chars
    if header and header.strip():
        budget = max(1, max_chars - len(header) - 1)
    chunks = split_into_chunks(text, budget, numbered=numbered)
    return [apply_chat_header(chunk, header) for chunk in chunks]
