"""
Breath envelope tests.

Run:
    python -m pytest tests/test_envelope.py -v
"""

import math

import pytest

from glow_grid.patterns.envelope import BREATH_EXPONENT, BreathEnvelope, breath_pulse


class TestBreathPulse:
    """Shape and bounds of the 0 -> peak -> 0 curve."""

    def test_zero_outside_window(self):
        assert breath_pulse(-0.001, 900) == 0.0
        assert breath_pulse(-500, 900) == 0.0
        assert breath_pulse(900.001, 900) == 0.0
        assert breath_pulse(5000, 900, 0.5) == 0.0

    def test_zero_at_both_ends(self):
        assert breath_pulse(0, 900) == 0.0
        assert breath_pulse(900, 900) == pytest.approx(0.0, abs=1e-9)

    def test_peak_at_half_duration(self):
        assert breath_pulse(450, 900) == 1.0
        assert breath_pulse(450, 900, 0.35) == pytest.approx(0.35)

    def test_never_exceeds_amplitude(self):
        for amp in (0.35, 0.9, 1.0):
            values = [breath_pulse(dt, 900, amp) for dt in range(0, 901)]
            assert max(values) == pytest.approx(amp)
            assert all(0.0 <= v <= amp for v in values)

    def test_closed_form(self):
        expected = math.sin(math.pi * 100 / 900) ** 1.45
        assert breath_pulse(100, 900) == pytest.approx(expected)
        assert BREATH_EXPONENT == 1.45

    def test_symmetric(self):
        assert breath_pulse(200, 900) == pytest.approx(breath_pulse(700, 900))


class TestBreathEnvelope:

    def test_matches_function(self):
        env = BreathEnvelope(duration_ms=2200, amplitude=0.9)
        assert env.get_intensity(1100) == pytest.approx(0.9)
        assert env.get_intensity(300) == breath_pulse(300, 2200, 0.9)

    def test_rejects_non_positive_duration(self):
        with pytest.raises(ValueError):
            BreathEnvelope(0)
