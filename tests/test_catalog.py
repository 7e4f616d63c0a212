"""
Pattern catalog tests.

Run:
    python -m pytest tests/test_catalog.py -v
"""

import pytest

from glow_grid.patterns import (
    DEFAULT_PATTERN,
    PATTERNS,
    Pattern,
    RandomSpec,
    get_pattern,
    list_patterns,
    register_pattern,
    resolve_pattern,
)
from glow_grid.patterns.preview import all_previews, get_preview, phase_offset
from glow_grid.patterns.types import AccentPulse


class TestBuiltins:

    def test_catalog_contents(self):
        assert list_patterns() == ["spiralOuter", "waveDiagonal", "pulse", "random"]

    def test_loop_lengths(self):
        assert get_pattern("spiralOuter").loop_ms == 1600
        assert get_pattern("waveDiagonal").loop_ms == 650
        assert get_pattern("pulse").loop_ms == 600
        assert get_pattern("random").loop_ms == 2000

    def test_schedule_loop_is_steps_times_beat(self):
        for name in list_patterns():
            pattern = PATTERNS[name]
            if not pattern.is_procedural:
                assert pattern.loop_ms == len(pattern.frames) * pattern.beat_ms

    def test_loops_are_sixty_fps_friendly(self):
        for name in list_patterns():
            assert get_pattern(name).loop_ms % 50 == 0

    def test_breath_longer_than_beat(self):
        for name in list_patterns():
            pattern = get_pattern(name)
            assert pattern.pulse_ms == 900
            assert pattern.pulse_ms > pattern.beat_ms

    def test_cells_in_range(self):
        for name in list_patterns():
            for step in PATTERNS[name].frames:
                assert all(0 <= idx <= 8 for idx in step)

    def test_only_spiral_has_accent(self):
        accented = [name for name in list_patterns() if PATTERNS[name].accent]
        assert accented == ["spiralOuter"]
        accent = PATTERNS["spiralOuter"].accent
        assert accent.cell == 4
        assert accent.amplitude == 0.9
        # Period matches the loop so the accent never seams
        assert accent.period_ms == PATTERNS["spiralOuter"].loop_ms == 1600

    def test_spiral_skips_center(self):
        cells = [idx for step in PATTERNS["spiralOuter"].frames for idx in step]
        assert 4 not in cells
        assert sorted(cells) == [0, 1, 2, 3, 5, 6, 7, 8]


class TestLookup:

    def test_unknown_returns_none(self):
        assert get_pattern("nope") is None

    def test_resolve_falls_back_to_default(self):
        pattern, found = resolve_pattern("nope")
        assert not found
        assert pattern.id == DEFAULT_PATTERN == "spiralOuter"

    def test_resolve_known(self):
        pattern, found = resolve_pattern("pulse")
        assert found
        assert pattern is PATTERNS["pulse"]

    def test_random_comes_back_seeded(self):
        pattern = get_pattern("random", seed="123")
        assert pattern.seed == "123"
        assert len(pattern.events) > 0
        assert PATTERNS["random"].events == ()

    def test_seeded_random_is_cached(self):
        assert get_pattern("random", seed="abc") is get_pattern("random", seed="abc")
        assert get_pattern("random", seed="abc") is not get_pattern("random", seed="abd")

    def test_schedule_patterns_ignore_seed(self):
        assert get_pattern("pulse", seed="999") is PATTERNS["pulse"]


class TestPatternValidation:

    def test_duplicate_id_rejected(self):
        with pytest.raises(ValueError):
            register_pattern(Pattern(id="pulse", frames=((4,),), beat_ms=100))

    def test_cell_out_of_range(self):
        with pytest.raises(ValueError):
            Pattern(id="bad", frames=((0,), (9,)), beat_ms=100)

    def test_repeated_cell_in_step(self):
        with pytest.raises(ValueError):
            Pattern(id="bad", frames=((1, 1),), beat_ms=100)

    def test_loop_mismatch(self):
        with pytest.raises(ValueError):
            Pattern(id="bad", frames=((0,), (1,)), beat_ms=100, loop_ms=300)

    def test_loop_derived(self):
        pattern = Pattern(id="ok", frames=((0,), (1,), (2,)), beat_ms=200)
        assert pattern.loop_ms == 600
        assert pattern.step_count == 3

    def test_procedural_needs_loop(self):
        with pytest.raises(ValueError):
            Pattern(id="bad", beat_ms=100, random=RandomSpec())

    def test_procedural_step_count(self):
        assert PATTERNS["random"].step_count == 20

    def test_events_only_for_procedural(self):
        with pytest.raises(ValueError):
            PATTERNS["pulse"].with_events("1", [])

    def test_bad_accent(self):
        with pytest.raises(ValueError):
            AccentPulse(cell=9)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            PATTERNS["pulse"].beat_ms = 10


class TestPreviews:

    def test_default_phase_is_half_breath(self):
        assert phase_offset("pulse") == 450

    def test_snapshot_matches_phase(self):
        from glow_grid.patterns import compute_intensities

        preview = get_preview("pulse")
        assert len(preview.snapshot) == 9
        assert list(preview.snapshot) == compute_intensities(450, PATTERNS["pulse"])
        # Center's breath peaks at half the pulse length
        assert preview.snapshot[4] == pytest.approx(1.0)

    def test_previews_cached(self):
        assert get_preview("spiralOuter") is get_preview("spiralOuter")

    def test_all_previews_lit(self):
        previews = all_previews()
        assert [p.pattern_id for p in previews] == list_patterns()
        for preview in previews:
            assert max(preview.snapshot) > 0
            assert all(0.0 <= v <= 1.0 for v in preview.snapshot)

    def test_unknown_pattern(self):
        with pytest.raises(KeyError):
            get_preview("nope")
