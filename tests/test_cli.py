"""
Command line tests.

Run:
    python -m pytest tests/test_cli.py -v
"""

from glow_grid.cli import main


class TestPatternsCommand:

    def test_lists_catalog(self, capsys):
        assert main(["patterns"]) == 0
        out = capsys.readouterr().out
        for name in ("spiralOuter", "waveDiagonal", "pulse", "random"):
            assert name in out
        assert "frames@60fps=96" in out
        assert "(seam)" not in out

    def test_other_fps_flags_seams(self, capsys):
        assert main(["patterns", "--fps", "30"]) == 0
        assert "(seam)" in capsys.readouterr().out


class TestCaptureCommand:

    def test_in_process_capture(self, tmp_path, capsys):
        assert main(["capture", "waveDiagonal", "60", "--out", str(tmp_path)]) == 0
        frames = sorted((tmp_path / "waveDiagonal").iterdir())
        assert len(frames) == 39
        assert frames[0].name == "00000.png"

    def test_unknown_pattern_falls_back(self, tmp_path, capsys):
        assert main(["capture", "nope", "60", "--out", str(tmp_path)]) == 0
        assert len(list((tmp_path / "spiralOuter").iterdir())) == 96
        assert "unknown pattern 'nope'" in capsys.readouterr().out

    def test_random_with_seed_and_query(self, tmp_path, capsys):
        args = ["capture", "--query", "?p=random&seed=7", "--out", str(tmp_path)]
        assert main(args) == 0
        assert len(list((tmp_path / "random").iterdir())) == 120

    def test_non_integer_frames_warns(self, tmp_path, capsys):
        assert main(["capture", "waveDiagonal", "30", "--out", str(tmp_path)]) == 0
        assert "[CAPTURE] Warning:" in capsys.readouterr().out
