"""Unit tests for the per-word delay model.

RULES:
- 300 WPM gives a 200 ms base; punctuation x1.5; long words x1.2
- When both apply, the long-word factor replaces the punctuation factor
  unless the model is built with compose=True
"""

import math

import pytest

from speedread.config import MAX_WPM, MIN_WPM
from speedread.core.delay import DelayModel, compute_delay_ms
from speedread.core.ir import WordToken


class TestComputeDelay:
    """compute_delay_ms() applies the base budget and one multiplier."""

    def test_base_delay(self):
        assert compute_delay_ms("Hello", 300) == pytest.approx(200.0)

    def test_punctuation_extends_delay(self):
        assert compute_delay_ms("world.", 300) == pytest.approx(300.0)

    @pytest.mark.parametrize("mark", [".", ",", ";", "!", "?"])
    def test_each_pause_mark(self, mark):
        assert compute_delay_ms("word" + mark, 600) == pytest.approx(150.0)

    @pytest.mark.parametrize("word", ["colon:", "dash-", "quote\"", "paren)", ".leading"])
    def test_other_characters_do_not_pause(self, word):
        assert compute_delay_ms(word, 300) == pytest.approx(200.0)

    def test_long_word_extends_delay(self):
        assert compute_delay_ms("Recognition", 300) == pytest.approx(240.0)

    def test_ten_characters_is_not_long(self):
        assert compute_delay_ms("abcdefghij", 300) == pytest.approx(200.0)

    def test_long_word_overrides_punctuation(self):
        # 11 letters + "." : the long-word rule wins
        assert compute_delay_ms("Recognition.", 300) == pytest.approx(240.0)

    def test_accepts_word_token(self):
        token = WordToken(text="world.", index=1)
        assert compute_delay_ms(token, 300) == compute_delay_ms("world.", 300)

    def test_rate_is_clamped(self):
        assert compute_delay_ms("a", 0) == compute_delay_ms("a", MIN_WPM)
        assert compute_delay_ms("a", -50) == pytest.approx(1000.0)
        assert compute_delay_ms("a", 10 ** 9) == pytest.approx(40.0)

    def test_empty_word_gets_base_delay(self):
        assert compute_delay_ms("", 300) == pytest.approx(200.0)

    @pytest.mark.parametrize("word", ["a", "world.", "Recognition", "Recognition!"])
    def test_strictly_decreasing_and_positive(self, word):
        previous = math.inf
        for wpm in range(MIN_WPM, MAX_WPM + 1, 10):
            delay = compute_delay_ms(word, wpm)
            assert 0 < delay < previous
            assert math.isfinite(delay)
            previous = delay


class TestDelayModel:
    """DelayModel rules are data and can compose multipliers."""

    def test_compose_multiplies_both_factors(self):
        model = DelayModel(compose=True)
        assert model.delay_ms("Recognition.", 300) == pytest.approx(200.0 * 1.5 * 1.2)

    def test_compose_single_rule_unchanged(self):
        model = DelayModel(compose=True)
        assert model.delay_ms("world.", 300) == pytest.approx(300.0)
        assert model.delay_ms("Recognition", 300) == pytest.approx(240.0)

    def test_custom_rules(self):
        model = DelayModel(
            pause_punctuation=frozenset({":"}),
            punctuation_multiplier=2.0,
            long_word_threshold=3,
            long_word_multiplier=1.1,
        )
        assert model.multiplier("a:") == 2.0
        assert model.multiplier("a.") == 1.0
        assert model.multiplier("abcd") == 1.1

    def test_base_delay(self):
        assert DelayModel().base_delay_ms(1500) == pytest.approx(40.0)
