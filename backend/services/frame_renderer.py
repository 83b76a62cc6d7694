"""
Frame rendering for the snake board.

Draws a GameState snapshot into a PIL image:
- light green background with thin grid lines
- the apple as an inset pink/red square
- the snake as inset black squares
- an optional translucent game-over box in the middle

Rendering never mutates the state it is given.
"""

import io
import logging
import os
from typing import Any, Dict, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from domain.game_state import GameState

logger = logging.getLogger(__name__)

DEFAULT_CELL_SIZE = 20


class ColorScheme:
    """Colors for the board"""

    BACKGROUND = "#E8F7E8"
    GRID_LINE = (0, 120, 0, 64)
    APPLE = "#D24D6A"
    SNAKE = "#111111"

    OVERLAY_BG = (0, 0, 0, 166)
    OVERLAY_TEXT = "#FFFFFF"


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to RGB tuple"""
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


class FrameRenderer:
    """Render game snapshots to images"""

    def __init__(self, cell_size: int = DEFAULT_CELL_SIZE):
        if cell_size < 3:
            raise ValueError(f"cell_size must be at least 3 pixels, got {cell_size}")
        self.cell_size = cell_size
        self.font = ImageFont.load_default()

    def render_frame(self, state: GameState, message: Optional[str] = None) -> Image.Image:
        """Render a single frame of the game"""
        size = state.cell_count * self.cell_size
        img = Image.new('RGBA', (size, size), hex_to_rgb(ColorScheme.BACKGROUND) + (255,))

        self._draw_grid(img, state.cell_count)

        draw = ImageDraw.Draw(img)
        fx, fy = state.food
        self._draw_cell(draw, fx, fy, hex_to_rgb(ColorScheme.APPLE))

        for x, y in state.cells:
            self._draw_cell(draw, x, y, hex_to_rgb(ColorScheme.SNAKE))

        if message:
            self._draw_overlay(img, message)

        return img.convert('RGB')

    def render_png(self, state: GameState, message: Optional[str] = None) -> bytes:
        buffer = io.BytesIO()
        self.render_frame(state, message).save(buffer, format='PNG')
        return buffer.getvalue()

    def save_frame(self, state: GameState, path: str, message: Optional[str] = None) -> str:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self.render_frame(state, message).save(path)
        logger.debug(f"Saved frame for tick {state.tick} to {path}")
        return path

    def _draw_grid(self, img: Image.Image, cell_count: int):
        # Grid lines are translucent, so draw them on their own layer
        layer = Image.new('RGBA', img.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        size = cell_count * self.cell_size
        for i in range(cell_count + 1):
            pos = min(i * self.cell_size, size - 1)
            draw.line([pos, 0, pos, size], fill=ColorScheme.GRID_LINE, width=1)
            draw.line([0, pos, size, pos], fill=ColorScheme.GRID_LINE, width=1)
        img.alpha_composite(layer)

    def _draw_cell(self, draw: ImageDraw.ImageDraw, x: int, y: int, color: Tuple[int, int, int]):
        left = x * self.cell_size + 1
        top = y * self.cell_size + 1
        # 1px inset on every side
        right = left + self.cell_size - 3
        bottom = top + self.cell_size - 3
        draw.rectangle([left, top, right, bottom], fill=color)

    def _draw_overlay(self, img: Image.Image, message: str):
        layer = Image.new('RGBA', img.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)

        bbox = draw.textbbox((0, 0), message, font=self.font)
        text_width = bbox[2] - bbox[0]
        text_height = bbox[3] - bbox[1]
        pad_x, pad_y = 22, 16

        box_left = (img.width - text_width) // 2 - pad_x
        box_top = (img.height - text_height) // 2 - pad_y
        box = [box_left, box_top, box_left + text_width + 2 * pad_x, box_top + text_height + 2 * pad_y]
        draw.rounded_rectangle(box, radius=8, fill=ColorScheme.OVERLAY_BG)
        draw.text(
            (box_left + pad_x, box_top + pad_y - bbox[1]),
            message,
            fill=hex_to_rgb(ColorScheme.OVERLAY_TEXT),
            font=self.font
        )
        img.alpha_composite(layer)


def state_from_dict(data: Dict[str, Any]) -> GameState:
    """Rebuild a GameState from its to_dict() / replay form."""
    return GameState(
        tick=data.get("tick", 0),
        cells=[tuple(c) for c in data.get("cells", [])],
        velocity=tuple(data.get("velocity", (0, 0))),
        food=tuple(data["food"]),
        score=data.get("score", 0),
        max_length=data.get("max_length", len(data.get("cells", []))),
        cell_count=data["cell_count"],
        paused=data.get("paused", False),
        game_over=data.get("game_over", False),
        games_played=data.get("games_played", 0),
        boundary=data.get("boundary", "wrap")
    )
