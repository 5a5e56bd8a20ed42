"""Per-word stutter decision and the ``X-X-word`` renderer.

WHY: Whether a single word gets stuttered depends on a handful of rules
(eligibility, command suppression, existing stutters, soft-mode repeats,
per-quote caps) plus a biased random roll. Keeping that policy in one
function makes the decision order explicit and testable with a fixed
random source.

HOW: apply_stutter() walks the rules in order and short-circuits on the
first one that says "leave it alone". If the roll succeeds, a repeat count
is drawn from a decaying chance and build_stuttered_word() prepends that
many ``first_char + "-"`` groups to the word.

RULES:
- Decision order: ineligible → (consume first-eligible) → suppressed →
  already stuttered → soft-mode repeat → max repeats → per-quote cap → roll.
- First-eligible status is consumed by every eligible word, including a
  suppressed one (the word after ``/em`` in a quote never looks "first"
  afterwards).
- Vowel-initial words use the inverted consonant bias.
- SOFT damps the word chance by 0.9; the repeat chance is scaled by 1.1
  (HARD) or 0.7 (SOFT) and decays by 0.75 (HARD) or 0.5 (SOFT).
- The word text is never altered other than by the prepended stutter.
"""

from __future__ import annotations

from typing import NamedTuple

from stutter_writer.core.seed import UniformSource
from stutter_writer.core.settings import EffectiveSettings, StutterMode, clamp01

VOWELS = frozenset("AEIOUaeiou")
URL_PREFIXES = ("http", "www")


class StutterResult(NamedTuple):
    text: str
    stuttered: bool


class SegmentState:
    """Mutable bookkeeping for one quoted segment.

    Created fresh (or reset) whenever a quote opens, so nothing leaks from
    one quoted span to the next.
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.stutters = 0
        self.first_eligible = True
        self.last_word: str | None = None
        self.last_separator = ""
        self.suppress_next_word = False
        self.last_word_stuttered = False


def is_vowel(ch: str) -> bool:
    return ch in VOWELS


def bias_factor(effective: EffectiveSettings, starts_with_vowel: bool) -> float:
    """Weight applied to chances; consonant bias favours consonant starts."""
    if starts_with_vowel:
        return 0.5 + 0.5 * (1.0 - effective.consonant_bias)
    return 0.5 + 0.5 * effective.consonant_bias


def is_eligible_word(word: str, effective: EffectiveSettings) -> bool:
    """True when the word is long enough, letter-initial and not URL-like."""
    if len(word) < max(effective.min_word_length, 1):
        return False
    if not word[0].isalpha():
        return False
    if word.lower().startswith(URL_PREFIXES):
        return False
    return True


def is_stutter_prefix(prefix: str | None, word: str) -> bool:
    """True if ``prefix`` (at most two chars) already leads ``word``.

    Used to detect hand-written stutters such as ``I-I`` or ``wh-what``.
    """
    if not prefix:
        return False
    if len(prefix) > 2 or len(word) < len(prefix):
        return False
    return word.lower().startswith(prefix.lower())


def word_chance(effective: EffectiveSettings, starts_with_vowel: bool) -> float:
    """Probability that an eligible word is stuttered at all."""
    chance = effective.word_stutter_chance * bias_factor(effective, starts_with_vowel)
    if effective.mode == StutterMode.SOFT:
        chance *= 0.9
    return clamp01(chance)


def repeat_count(
    effective: EffectiveSettings,
    starts_with_vowel: bool,
    rng: UniformSource,
) -> int:
    """Draw how many ``X-`` groups to render (1..max_repeats_per_word)."""
    if starts_with_vowel:
        base = effective.vowel_repeat_chance
    else:
        base = effective.consonant_repeat_chance
    chance = clamp01(base * bias_factor(effective, starts_with_vowel))
    hard = effective.mode == StutterMode.HARD
    chance = clamp01(chance * (1.1 if hard else 0.7))
    decay = 0.75 if hard else 0.5

    repeats = 1
    for _ in range(2, effective.max_repeats_per_word + 1):
        if rng.random() < chance:
            repeats += 1
            chance *= decay
            continue
        break
    return repeats


def build_stuttered_word(word: str, count: int) -> str:
    """Render ``count`` copies of ``first_char + "-"`` before the word.

    >>> build_stuttered_word("drink", 2)
    'd-d-drink'
    """
    if count <= 0 or not word:
        return word
    return (word[0] + "-") * count + word


def apply_stutter(
    word: str,
    effective: EffectiveSettings,
    rng: UniformSource,
    state: SegmentState,
    already_stuttered: bool = False,
    suppressed: bool = False,
    can_repeat: bool = True,
) -> StutterResult:
    """Decide whether to stutter one word and render it if so.

    Args:
        word: The completed word token.
        effective: Resolved settings for this call.
        rng: Uniform source, only consulted when a roll is needed.
        state: The current segment's state; ``stutters`` and
            ``first_eligible`` are updated in place.
        already_stuttered: The token follows a hand-written ``X-`` prefix.
        suppressed: The token follows a leading ``/`` (chat command).
        can_repeat: False blocks a soft-mode repeat of the previous stutter.

    Returns:
        StutterResult with the (possibly) stuttered text.
    """
    if not is_eligible_word(word, effective):
        return StutterResult(word, False)

    was_first = state.first_eligible
    state.first_eligible = False

    if suppressed:
        return StutterResult(word, False)

    if already_stuttered and effective.respect_existing_stutters:
        return StutterResult(word, False)

    if not can_repeat:
        return StutterResult(word, False)

    if effective.max_repeats_per_word <= 0:
        return StutterResult(word, False)

    if effective.max_stutters_per_quote > 0 and state.stutters >= effective.max_stutters_per_quote:
        return StutterResult(word, False)

    starts_with_vowel = is_vowel(word[0])
    chance = word_chance(effective, starts_with_vowel)
    should_stutter = (effective.always_stutter_first_word and was_first) or (
        chance > 0.0 and rng.random() < chance
    )
    if not should_stutter:
        return StutterResult(word, False)

    count = repeat_count(effective, starts_with_vowel, rng)
    if count <= 0:
        return StutterResult(word, False)

    state.stutters += 1
    return StutterResult(build_stuttered_word(word, count), True)
