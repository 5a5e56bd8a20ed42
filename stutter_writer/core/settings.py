"""Stutter settings, strength presets, and the effective-settings resolver.

WHY: Users pick a strength preset (Off, Light, Medium, Heavy) or switch to
Custom and tune every probability themselves. The stutter engine should
never have to care which of the two happened; it needs one fully resolved,
clamped parameter set per call.

HOW: StutterSettings is the mutable, caller-owned record (what the settings
file and the CLI produce). PRESET_TABLE is the single authoritative table of
preset parameters. resolve_effective_settings() turns the raw record into a
frozen EffectiveSettings, either from the table or from the clamped custom
values.

RULES:
- PRESET_TABLE is the only place preset numbers live; preview code and the
  resolver both read it via preset_parameters().
- Chances are clamped to [0, 1]; max repeats and min word length are
  floored at 1; the per-quote cap is floored at 0 (0 means "no cap").
- min_word_length, respect_existing_stutters, always_stutter_first_word and
  max_stutters_per_quote always come from the raw record, even for presets.
- Unknown preset values resolve like MEDIUM.
- Resolution never raises.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict


class StrengthPreset(enum.IntEnum):
    """Named stutter intensity. Integer values feed the stable seed hash."""

    OFF = 0
    LIGHT = 1
    MEDIUM = 2
    HEAVY = 3
    CUSTOM = 4


class StutterMode(enum.IntEnum):
    """SOFT suppresses repeated stutters and damps chances; HARD does neither."""

    SOFT = 0
    HARD = 1


@dataclass
class StutterSettings:
    """User-facing stutter configuration.

    Owned by the caller; the transform only reads it. Values may be out of
    range (negative chances, zero repeats); they are clamped during
    resolution rather than rejected.
    """

    strength_preset: StrengthPreset = StrengthPreset.MEDIUM
    mode: StutterMode = StutterMode.SOFT
    word_stutter_chance: float = 0.3
    consonant_bias: float = 0.7
    vowel_repeat_chance: float = 0.35
    consonant_repeat_chance: float = 0.45
    max_repeats_per_word: int = 2
    min_word_length: int = 2
    respect_existing_stutters: bool = True
    always_stutter_first_word: bool = True
    max_stutters_per_quote: int = 0
    stable_seed: bool = True
    stutter_single_quotes: bool = False


@dataclass(frozen=True)
class PresetParameters:
    """One row of the preset table."""

    mode: StutterMode
    word_stutter_chance: float
    consonant_bias: float
    vowel_repeat_chance: float
    consonant_repeat_chance: float
    max_repeats_per_word: int


@dataclass(frozen=True)
class EffectiveSettings:
    """Fully resolved parameters for a single transform call.

    RULES:
    - All chances are within [0, 1].
    - max_repeats_per_word >= 1 and min_word_length >= 1.
    - max_stutters_per_quote >= 0 (0 disables the cap).
    """

    strength_preset: StrengthPreset
    mode: StutterMode
    word_stutter_chance: float
    consonant_bias: float
    vowel_repeat_chance: float
    consonant_repeat_chance: float
    max_repeats_per_word: int
    min_word_length: int
    respect_existing_stutters: bool
    always_stutter_first_word: bool
    max_stutters_per_quote: int


PRESET_TABLE: Dict[StrengthPreset, PresetParameters] = {
    StrengthPreset.OFF: PresetParameters(StutterMode.SOFT, 0.0, 0.6, 0.2, 0.25, 1),
    StrengthPreset.LIGHT: PresetParameters(StutterMode.SOFT, 0.15, 0.65, 0.25, 0.3, 1),
    StrengthPreset.MEDIUM: PresetParameters(StutterMode.SOFT, 0.3, 0.7, 0.35, 0.45, 2),
    StrengthPreset.HEAVY: PresetParameters(StutterMode.HARD, 0.5, 0.8, 0.5, 0.65, 3),
}


def clamp01(value: float) -> float:
    """Clamp a probability into [0, 1]."""
    if value < 0.0:
        return 0.0
    if value > 1.0:
        return 1.0
    return float(value)


def preset_parameters(preset: StrengthPreset) -> PresetParameters:
    """Return the table row for a preset, falling back to MEDIUM.

    CUSTOM and unknown values have no row of their own, so they also get
    the MEDIUM row. Preview code uses this to show what a preset means.
    """
    return PRESET_TABLE.get(preset, PRESET_TABLE[StrengthPreset.MEDIUM])


def resolve_effective_settings(raw: StutterSettings) -> EffectiveSettings:
    """Resolve a raw settings record into a clamped, immutable parameter set.

    Args:
        raw: The caller's settings. Not modified.

    Returns:
        EffectiveSettings for one transform call.
    """
    min_word_length = max(int(raw.min_word_length), 1)
    max_stutters = max(int(raw.max_stutters_per_quote), 0)

    if raw.strength_preset == StrengthPreset.CUSTOM:
        return EffectiveSettings(
            strength_preset=StrengthPreset.CUSTOM,
            mode=StutterMode.HARD if raw.mode == StutterMode.HARD else StutterMode.SOFT,
            word_stutter_chance=clamp01(raw.word_stutter_chance),
            consonant_bias=clamp01(raw.consonant_bias),
            vowel_repeat_chance=clamp01(raw.vowel_repeat_chance),
            consonant_repeat_chance=clamp01(raw.consonant_repeat_chance),
            max_repeats_per_word=max(int(raw.max_repeats_per_word), 1),
            min_word_length=min_word_length,
            respect_existing_stutters=bool(raw.respect_existing_stutters),
            always_stutter_first_word=bool(raw.always_stutter_first_word),
            max_stutters_per_quote=max_stutters,
        )

    if raw.strength_preset in PRESET_TABLE:
        preset = StrengthPreset(raw.strength_preset)
    else:
        preset = StrengthPreset.MEDIUM
    row = preset_parameters(preset)

    return EffectiveSettings(
        strength_preset=preset,
        mode=row.mode,
        word_stutter_chance=row.word_stutter_chance,
        consonant_bias=row.consonant_bias,
        vowel_repeat_chance=row.vowel_repeat_chance,
        consonant_repeat_chance=row.consonant_repeat_chance,
        max_repeats_per_word=row.max_repeats_per_word,
        min_word_length=min_word_length,
        respect_existing_stutters=bool(raw.respect_existing_stutters),
        always_stutter_first_word=bool(raw.always_stutter_first_word),
        max_stutters_per_quote=max_stutters,
    )
