"""
Tests for the Pillow frame renderer and the display collaborators.
"""

import io
import os
import sys

from PIL import Image

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.constants import RIGHT  # noqa: E402
from domain.game_state import GameState  # noqa: E402
from services.display import LogDisplay, MemoryDisplay  # noqa: E402
from services.frame_renderer import (  # noqa: E402
    ColorScheme,
    FrameRenderer,
    hex_to_rgb,
    state_from_dict,
)


def make_state(**kwargs):
    params = dict(
        tick=3,
        cells=[(2, 1), (1, 1), (0, 1)],
        velocity=RIGHT,
        food=(4, 4),
        score=0,
        max_length=4,
        cell_count=5
    )
    params.update(kwargs)
    return GameState(**params)


def cell_center(renderer, x, y):
    half = renderer.cell_size // 2
    return (x * renderer.cell_size + half, y * renderer.cell_size + half)


class TestFrameRenderer:

    def test_frame_size_matches_board(self):
        renderer = FrameRenderer(cell_size=20)
        img = renderer.render_frame(make_state())
        assert img.size == (100, 100)
        assert img.mode == "RGB"

    def test_snake_and_apple_colors(self):
        renderer = FrameRenderer(cell_size=20)
        img = renderer.render_frame(make_state())

        assert img.getpixel(cell_center(renderer, 2, 1)) == hex_to_rgb(ColorScheme.SNAKE)
        assert img.getpixel(cell_center(renderer, 0, 1)) == hex_to_rgb(ColorScheme.SNAKE)
        assert img.getpixel(cell_center(renderer, 4, 4)) == hex_to_rgb(ColorScheme.APPLE)
        assert img.getpixel(cell_center(renderer, 3, 3)) == hex_to_rgb(ColorScheme.BACKGROUND)

    def test_cells_are_inset(self):
        """The outermost pixel row of a snake cell is left as grid/background."""
        renderer = FrameRenderer(cell_size=20)
        img = renderer.render_frame(make_state())
        assert img.getpixel((2 * 20, 1 * 20)) != hex_to_rgb(ColorScheme.SNAKE)

    def test_render_does_not_mutate_state(self):
        state = make_state()
        before = state.to_dict()
        FrameRenderer().render_frame(state, "Game Over! Score: 0")
        assert state.to_dict() == before

    def test_overlay_changes_center(self):
        renderer = FrameRenderer(cell_size=20)
        state = make_state(cells=[(0, 0)], food=(4, 0))
        plain = renderer.render_frame(state)
        overlaid = renderer.render_frame(state, "Game Over! Score: 3")
        assert plain.getpixel((50, 50)) != overlaid.getpixel((50, 50))

    def test_render_png(self):
        png = FrameRenderer().render_png(make_state())
        assert png[:8] == b"\x89PNG\r\n\x1a\n"
        assert Image.open(io.BytesIO(png)).size == (100, 100)

    def test_save_frame_creates_directory(self, tmp_path):
        path = tmp_path / "nested" / "frame.png"
        FrameRenderer().save_frame(make_state(), str(path))
        assert path.exists()

    def test_state_from_dict_round_trip(self):
        state = make_state(score=2, game_over=True)
        rebuilt = state_from_dict(state.to_dict())
        assert rebuilt.cells == state.cells
        assert rebuilt.food == state.food
        assert rebuilt.velocity == state.velocity
        assert rebuilt.game_over is True


class TestDisplays:

    def test_memory_display(self):
        display = MemoryDisplay()
        display.show_score(3)
        display.show_game_over("Game Over! Score: 3")
        assert display.score == 3
        assert display.overlay_visible is True
        display.hide_game_over()
        assert display.message is None

    def test_log_display_logs_game_over(self, caplog):
        display = LogDisplay()
        with caplog.at_level("INFO", logger="services.display"):
            display.show_score(1)
            display.show_game_over("Game Over! Score: 1")
        assert "Score: 1" in caplog.text
        assert "Game Over! Score: 1" in caplog.text
        assert display.message == "Game Over! Score: 1"
