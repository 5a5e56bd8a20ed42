"""Tests for the public transform() entry point.

WHY: transform() is what every caller uses. Its guarantees (narration is
never touched, unbalanced lines pass through, stable seeds reproduce, the
Off preset is a no-op) are the behaviours users notice first.

HOW: Property-style checks run against the real seeded generator across
all presets; exact-output checks inject a FixedSource through the ``rng``
parameter.
"""

import re

import pytest

from stutter_writer import transform
from stutter_writer.core.settings import StrengthPreset, StutterMode, StutterSettings

ALL_PRESETS = list(StrengthPreset)


def _destutter(text):
    """Remove rendered ``X-`` prefixes (only valid for text without hyphens)."""
    return re.sub(r"\b\w-", "", text)


class TestPassThrough:

    def test_empty_text(self, medium_settings):
        assert transform("", medium_settings) == ""

    def test_none_text(self, medium_settings):
        assert transform(None, medium_settings) is None

    def test_none_settings(self):
        assert transform('"hello there"', None) == '"hello there"'

    @pytest.mark.parametrize("preset", ALL_PRESETS)
    def test_text_without_quotes_is_unchanged(self, preset):
        settings = StutterSettings(strength_preset=preset, mode=StutterMode.HARD)
        text = "/em she walks over, orders a drink and waits.\nNothing is said."
        assert transform(text, settings) == text

    def test_off_preset_is_noop_on_quoted_text(self):
        settings = StutterSettings(strength_preset=StrengthPreset.OFF)
        assert transform('He said "hello world"', settings) == 'He said "hello world"'

    def test_zero_chance_without_first_word_is_noop(self, custom_settings, fixed_source):
        settings = custom_settings(word_stutter_chance=0.0)
        rng = fixed_source([0.0] * 5)
        assert transform('"hello world"', settings, rng=rng) == '"hello world"'
        assert rng.calls == 0

    @pytest.mark.parametrize("preset", ALL_PRESETS)
    def test_unbalanced_line_is_unchanged(self, preset):
        settings = StutterSettings(strength_preset=preset)
        text = 'He said "hello there, how are you'
        assert transform(text, settings) == text


class TestLines:

    def test_only_balanced_line_changes(self, medium_settings, fixed_source):
        text = 'A "one two"\nB "three'
        result = transform(text, medium_settings, rng=fixed_source())
        assert result == 'A "o-one two"\nB "three'

    def test_line_breaks_preserved(self, medium_settings, fixed_source):
        text = '"one"\r\n"two"\r"three"\n'
        result = transform(text, medium_settings, rng=fixed_source())
        assert result == '"o-one"\r\n"t-two"\r"t-three"\n'

    def test_quote_state_does_not_cross_lines(self, medium_settings, fixed_source):
        # The opening quote on line one has no partner on that line.
        text = '"start\nend" "fine"'
        result = transform(text, medium_settings, rng=fixed_source())
        assert result.split("\n")[0] == '"start'


class TestDeterminism:

    @pytest.mark.parametrize("preset", ALL_PRESETS)
    def test_stable_seed_reproduces(self, preset):
        text = 'She whispers "please, please tell me everything you know about it"'
        a = transform(text, StutterSettings(strength_preset=preset))
        b = transform(text, StutterSettings(strength_preset=preset))
        assert a == b

    def test_stutter_only_changes_quoted_words(self):
        settings = StutterSettings(strength_preset=StrengthPreset.HEAVY, stable_seed=False)
        text = 'Out "the quick brown fox jumps over the lazy dog" out'
        for _ in range(20):
            result = transform(text, settings)
            assert result.startswith('Out "')
            assert result.endswith('" out')
            assert _destutter(result) == text


class TestWorkedExample:

    def test_reproducible(self, worked_example, medium_settings):
        assert transform(worked_example, medium_settings) == transform(worked_example, StutterSettings())

    def test_narration_untouched(self, worked_example, medium_settings):
        result = transform(worked_example, medium_settings)
        prefix = '/em she walks over and asks the bartender "'
        assert result.startswith(prefix)
        quoted = result[len(prefix):]
        assert quoted.endswith('?"')
        assert _destutter(quoted) == 'Can I have a drink?"'

    def test_first_word_always_stutters(self, worked_example, medium_settings):
        result = transform(worked_example, medium_settings)
        quoted = result.split('"', 1)[1]
        assert quoted.startswith("C-")

    def test_exact_output_with_scripted_draws(self, worked_example, medium_settings, fixed_source):
        # "Can" is first (no roll); repeat roll fails. "have" fails its roll.
        # "drink" wins its roll (0.0) and its repeat roll (0.0) -> two repeats.
        rng = fixed_source([0.99, 0.99, 0.0, 0.0])
        result = transform(worked_example, medium_settings, rng=rng)
        assert result == '/em she walks over and asks the bartender "C-Can I have a d-d-drink?"'


class TestExistingStutters:

    def test_already_stuttered_is_respected(self, custom_settings, fixed_source):
        # The first "I" misses its roll; the second would take the 0.0 draw
        # if the hand-written stutter were not respected.
        settings = custom_settings(min_word_length=1, always_stutter_first_word=False)
        rng = fixed_source([0.99, 0.0])
        result = transform('"I-I already stutter"', settings, rng=rng)
        assert result == '"I-I a-already stutter"'
        assert rng.calls == 3

    def test_first_word_rule_still_applies_before_existing_stutter(self, fixed_source):
        # Detection only looks back at the previous word, so the leading "I"
        # is a plain first word and the following "I" is left alone.
        settings = StutterSettings(min_word_length=1)
        result = transform('"I-I already stutter"', settings, rng=fixed_source())
        assert result == '"I-I-I already stutter"'

    def test_respected_for_every_seed(self):
        settings = StutterSettings(
            strength_preset=StrengthPreset.HEAVY,
            min_word_length=1,
            always_stutter_first_word=False,
            stable_seed=False,
        )
        for _ in range(20):
            result = transform('"wh-what are you doing"', settings)
            assert "wh-what" in result
            assert "wh-w-what" not in result
