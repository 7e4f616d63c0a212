"""
Frame persistence and video encoding hand-off.

Frames are greyscale PNG stills (one grey level per cell) with zero-padded
sequential names, which ffmpeg reads directly as an image sequence.
"""

from pathlib import Path
from typing import Sequence

from PIL import Image, ImageDraw

from ..grid import GRID_SIZE, NUM_CELLS, cell_index

FRAME_NAME_DIGITS = 5
FRAME_SUFFIX = ".png"


def frame_name(index: int) -> str:
    return f"{index:0{FRAME_NAME_DIGITS}d}{FRAME_SUFFIX}"


class FrameWriter:
    """Writes intensity vectors as numbered greyscale stills."""

    def __init__(self, output_dir: Path, cell_px: int = 96, gap_px: int = 12):
        if cell_px <= 0 or gap_px < 0:
            raise ValueError("cell_px must be positive and gap_px non-negative")
        self.output_dir = Path(output_dir)
        self.cell_px = cell_px
        self.gap_px = gap_px
        self.frames_written = 0

    @property
    def size_px(self) -> int:
        """Width (and height) of a frame."""
        return GRID_SIZE * self.cell_px + (GRID_SIZE + 1) * self.gap_px

    def cell_box(self, row: int, col: int) -> tuple[int, int, int, int]:
        """Inclusive pixel box of a cell, as ImageDraw expects it."""
        pitch = self.cell_px + self.gap_px
        x0 = self.gap_px + col * pitch
        y0 = self.gap_px + row * pitch
        return (x0, y0, x0 + self.cell_px - 1, y0 + self.cell_px - 1)

    def render(self, intensities: Sequence[float]) -> Image.Image:
        """Render one frame: black background, each cell filled at its level."""
        if len(intensities) != NUM_CELLS:
            raise ValueError(f"Expected {NUM_CELLS} intensities, got {len(intensities)}")

        image = Image.new("L", (self.size_px, self.size_px), 0)
        draw = ImageDraw.Draw(image)
        for row in range(GRID_SIZE):
            for col in range(GRID_SIZE):
                level = round(max(0.0, min(1.0, intensities[cell_index(row, col)])) * 255)
                draw.rectangle(self.cell_box(row, col), fill=level)
        return image

    def write(self, index: int, intensities: Sequence[float]) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / frame_name(index)
        self.render(intensities).save(path)
        self.frames_written += 1
        return path


def output_video_name(pattern_id: str, seed: str | None = None) -> str:
    """File name for the encoded loop (seeded patterns carry their seed)."""
    seed_part = f"_seed-{seed}" if seed is not None else ""
    return f"{pattern_id}{seed_part}_hevc.mov"


def encode_command(
    frames_dir: Path,
    fps: float,
    output: Path,
    codec: str = "hevc_videotoolbox",
) -> list[str]:
    """ffmpeg invocation turning a numbered frame sequence into a looping clip."""
    return [
        "ffmpeg",
        "-y",
        "-framerate", f"{fps:g}",
        "-i", str(Path(frames_dir) / f"%0{FRAME_NAME_DIGITS}d{FRAME_SUFFIX}"),
        "-c:v", codec,
        "-tag:v", "hvc1",
        "-pix_fmt", "yuv420p",
        "-movflags", "+faststart",
        str(output),
    ]
