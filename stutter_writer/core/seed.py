"""Random source selection and stable seed derivation.

WHY: With "stable seed" on, the same text and settings must always stutter
the same way: live previews should not flicker on every redraw and a saved
draft should regenerate identically in another process. With it off, every
run rolls fresh.

HOW: compute_seed() folds the settings fields and every character code of
the input into a 32-bit signed integer using the classic ``hash * 31 + x``
accumulation with two's-complement wraparound. create_rng() seeds a
``random.Random`` with it, or lets ``random.Random`` seed itself from system
entropy when stability is off.

RULES:
- Field order is fixed: preset, mode, word chance, consonant bias, vowel
  repeat, consonant repeat (chances clamped, scaled to thousandths and
  truncated), max repeats, min word length, respect existing, single quotes,
  always first, max stutters per quote, then the input characters.
- Arithmetic wraps at 32 bits exactly like a signed int32 would.
- The engine only calls ``random()`` on the returned object (UniformSource),
  so any object with that method can stand in, e.g. in tests.
- A generator is never shared between transform calls.
"""

from __future__ import annotations

import random
from typing import Protocol

from stutter_writer.core.settings import StutterSettings, clamp01

_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


class UniformSource(Protocol):
    """Anything that yields uniform floats in [0, 1). ``random.Random`` fits."""

    def random(self) -> float:
        ...


def _to_int32(value: int) -> int:
    value &= _INT32_MASK
    if value & _INT32_SIGN:
        return value - (1 << 32)
    return value


def _seed_fields(settings: StutterSettings) -> list:
    return [
        int(settings.strength_preset),
        int(settings.mode),
        int(clamp01(settings.word_stutter_chance) * 1000),
        int(clamp01(settings.consonant_bias) * 1000),
        int(clamp01(settings.vowel_repeat_chance) * 1000),
        int(clamp01(settings.consonant_repeat_chance) * 1000),
        int(settings.max_repeats_per_word),
        int(settings.min_word_length),
        1 if settings.respect_existing_stutters else 0,
        1 if settings.stutter_single_quotes else 0,
        1 if settings.always_stutter_first_word else 0,
        int(settings.max_stutters_per_quote),
    ]


def compute_seed(text: str, settings: StutterSettings) -> int:
    """Derive the 32-bit signed seed for a (text, settings) pair.

    Args:
        text: The full input text (all lines).
        settings: The raw settings record (not the resolved one).

    Returns:
        An integer in [-2**31, 2**31).
    """
    value = 17
    for field_value in _seed_fields(settings):
        value = _to_int32(value * 31 + field_value)
    for ch in text:
        value = _to_int32(value * 31 + ord(ch))
    return value


def create_rng(text: str, settings: StutterSettings) -> UniformSource:
    """Create the generator for one transform call."""
    if not settings.stable_seed:
        return random.Random()
    return random.Random(compute_seed(text, settings))
