"""
Render Utilities

Functions for drawing grid states and saving debug images.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from PIL import Image, ImageDraw, ImageFont

from src.solver import Cell, GridState, Solution

logger = logging.getLogger(__name__)


# Debug settings
DEBUG_DIR = Path("./debug")
MAX_DEBUG_IMAGES = 10

CELL_SIZE = 32

# Fill colors per cell type
CELL_COLORS = {
    Cell.WALL: "#5d4037",
    Cell.FLOOR: "#eeeeee",
    Cell.TARGET: "#eeeeee",
    Cell.PIECE: "#ffb300",
    Cell.PIECE_ON_TARGET: "#4CAF50",
    Cell.ACTOR: "#eeeeee",
    Cell.ACTOR_ON_TARGET: "#eeeeee",
}
TARGET_COLOR = "#d32f2f"
ACTOR_COLOR = "#1976d2"


def render_state(
    state: GridState,
    solution: Optional[Solution] = None,
    cell_size: int = CELL_SIZE
) -> Image.Image:
    """
    Draw a grid state.

    Walls, pieces and floor are filled squares; targets are marked with a
    red ring and the actor with a blue disc. When a solution is given, a
    summary line is drawn below the grid.

    Args:
        state: State to draw
        solution: Optional solution to summarise
        cell_size: Edge length of one cell in pixels

    Returns:
        RGB PIL Image
    """
    rows = len(state.grid)
    cols = len(state.grid[0]) if rows else 0
    footer = 20 if solution is not None else 0

    image = Image.new("RGB", (cols * cell_size, rows * cell_size + footer), "white")
    draw = ImageDraw.Draw(image)
    inset = cell_size // 4

    for y, row in enumerate(state.grid):
        for x, cell in enumerate(row):
            left = x * cell_size
            top = y * cell_size
            box = [left, top, left + cell_size - 1, top + cell_size - 1]
            draw.rectangle(box, fill=CELL_COLORS[cell], outline="#bdbdbd")

            inner = [left + inset, top + inset,
                     left + cell_size - 1 - inset, top + cell_size - 1 - inset]
            if cell.is_target:
                draw.ellipse(inner, outline=TARGET_COLOR, width=2)
            if cell.has_actor:
                draw.ellipse(inner, fill=ACTOR_COLOR)

    if solution is not None:
        font = ImageFont.load_default()
        summary = (
            f"{solution.status.name}: {solution.move_count} moves, "
            f"{solution.push_count} pushes, {solution.metrics.strategy_name}"
        )
        draw.text((4, rows * cell_size + 4), summary, fill="black", font=font)

    return image


def save_debug_image(image: Image.Image, prefix: str = "debug") -> Path:
    """
    Save an image to the debug directory with a timestamped name.

    Args:
        image: Image to save
        prefix: File name prefix

    Returns:
        Path of the written file
    """
    # Ensure debug directory exists
    DEBUG_DIR.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:-3]
    path = DEBUG_DIR / f"{prefix}_{timestamp}.png"
    image.save(path, "PNG")
    logger.debug(f"Debug image saved: {path}")

    # Cleanup old debug images
    _cleanup_debug_images(prefix)
    return path


def _cleanup_debug_images(prefix: str) -> None:
    """Remove old debug images, keeping only the most recent MAX_DEBUG_IMAGES."""
    if not DEBUG_DIR.exists():
        return

    # Get all debug images sorted by modification time
    debug_files = sorted(
        DEBUG_DIR.glob(f"{prefix}_*.png"),
        key=lambda p: p.stat().st_mtime,
        reverse=True
    )

    # Remove old files
    for old_file in debug_files[MAX_DEBUG_IMAGES:]:
        try:
            old_file.unlink()
        except OSError as e:
            logger.warning(f"Could not remove old debug image {old_file}: {e}")
