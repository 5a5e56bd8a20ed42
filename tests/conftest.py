"""Shared test fixtures for the stutter_writer test suite.

WHY: The stutter engine is random by design. To pin down exactly which
word stutters and how often, tests need a random source that returns a
scripted sequence, plus a few settings records used across modules.

HOW: FixedSource implements the UniformSource protocol (a ``random()``
method) and replays the given values in order, then keeps returning
``exhausted`` (0.99 by default, high enough that no roll succeeds).
Fixtures build custom settings with predictable chances.

RULES:
- FixedSource counts its calls so tests can assert no draw happened.
- custom_settings uses consonant_bias 0.5 so vowel and consonant words get
  the same bias factor (0.75).
- custom_settings turns always_stutter_first_word off and caps repeats at 1
  unless a test overrides them.
"""

from typing import Iterable, List

import pytest

from stutter_writer.core.settings import (
    StrengthPreset,
    StutterMode,
    StutterSettings,
    resolve_effective_settings,
)

WORKED_EXAMPLE = '/em she walks over and asks the bartender "Can I have a drink?"'


class FixedSource:
    """Replays scripted uniform draws."""

    def __init__(self, values: Iterable[float] = (), exhausted: float = 0.99) -> None:
        self.values: List[float] = list(values)
        self.exhausted = exhausted
        self.calls = 0

    def random(self) -> float:
        index = self.calls
        self.calls += 1
        if index < len(self.values):
            return self.values[index]
        return self.exhausted


def make_custom_settings(**overrides) -> StutterSettings:
    values = dict(
        strength_preset=StrengthPreset.CUSTOM,
        mode=StutterMode.SOFT,
        word_stutter_chance=1.0,
        consonant_bias=0.5,
        vowel_repeat_chance=1.0,
        consonant_repeat_chance=1.0,
        max_repeats_per_word=1,
        min_word_length=2,
        respect_existing_stutters=True,
        always_stutter_first_word=False,
        max_stutters_per_quote=0,
        stable_seed=True,
        stutter_single_quotes=False,
    )
    values.update(overrides)
    return StutterSettings(**values)


@pytest.fixture
def fixed_source():
    """Factory fixture: ``fixed_source([0.1, 0.5])`` → FixedSource."""
    return FixedSource


@pytest.fixture
def custom_settings():
    """Factory fixture for CUSTOM settings with predictable chances."""
    return make_custom_settings


@pytest.fixture
def custom_effective():
    """Factory fixture returning resolved EffectiveSettings for custom values."""
    def _make(**overrides):
        return resolve_effective_settings(make_custom_settings(**overrides))
    return _make


@pytest.fixture
def medium_settings():
    """Default settings: MEDIUM preset, stable seed, always-stutter-first on."""
    return StutterSettings()


@pytest.fixture
def worked_example():
    return WORKED_EXAMPLE
