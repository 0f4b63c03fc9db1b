"""
Debug Image Utilities

Render board snapshots to PNG for inspecting generated levels and
auto-played sessions.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from PIL import Image, ImageDraw, ImageFont

from .engine import BlockKind, BoardState

logger = logging.getLogger(__name__)


DEBUG_DIR = Path("./debug")
MAX_DEBUG_IMAGES = 10

CELL_PX = 48
MARGIN_PX = 12
HEADER_PX = 24

BACKGROUND = "#1A1F2C"
GRID_LINE = "#3A3F4C"
EXIT_COLOR = "#4CAF50"
BLOCK_COLORS = {
    BlockKind.KEY: "#FCD34D",
    BlockKind.HORIZONTAL: "#60A5FA",
    BlockKind.VERTICAL: "#d32f2f",
}
HIGHLIGHT_OUTLINE = "#FFFFFF"


def render_board_image(board: BoardState, caption: Optional[str] = None) -> Image.Image:
    """
    Draw a board as an image.

    Blocks are filled by kind (key yellow, horizontal blue, vertical red),
    labelled with their id; highlighted blocks get a white outline and the
    exit lane is marked green on the right edge.

    Args:
        board: Board to draw
        caption: Optional text drawn above the grid

    Returns:
        RGB PIL Image
    """
    side = board.grid_size * CELL_PX
    image = Image.new("RGB", (side + 2 * MARGIN_PX, side + 2 * MARGIN_PX + HEADER_PX), BACKGROUND)
    draw = ImageDraw.Draw(image)
    font = ImageFont.load_default()

    top = MARGIN_PX + HEADER_PX
    for i in range(board.grid_size + 1):
        offset = i * CELL_PX
        draw.line([(MARGIN_PX + offset, top), (MARGIN_PX + offset, top + side)], fill=GRID_LINE)
        draw.line([(MARGIN_PX, top + offset), (MARGIN_PX + side, top + offset)], fill=GRID_LINE)

    exit_y = top + board.exit_row * CELL_PX
    draw.rectangle([MARGIN_PX + side, exit_y, MARGIN_PX + side + MARGIN_PX - 2, exit_y + CELL_PX],
                   fill=EXIT_COLOR)

    for block in board.blocks:
        x1 = MARGIN_PX + block.x * CELL_PX + 3
        y1 = top + block.y * CELL_PX + 3
        x2 = MARGIN_PX + block.right * CELL_PX - 3
        y2 = top + block.bottom * CELL_PX - 3
        outline = HIGHLIGHT_OUTLINE if block.is_highlighted else None
        draw.rectangle([x1, y1, x2, y2], fill=BLOCK_COLORS[block.kind],
                       outline=outline, width=3 if outline else 1)
        draw.text((x1 + 4, y1 + 4), block.id, fill="black", font=font)

    if caption:
        draw.text((MARGIN_PX, MARGIN_PX // 2), caption, fill="white", font=font)

    return image


def save_debug_image(board: BoardState, caption: Optional[str] = None,
                     path: Optional[Path] = None) -> Path:
    """
    Render a board and save it as PNG.

    Args:
        board: Board to draw
        caption: Optional caption
        path: Output file (defaults to a timestamped file in DEBUG_DIR)

    Returns:
        Path of the saved image
    """
    if path is None:
        DEBUG_DIR.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:-3]
        path = DEBUG_DIR / f"debug_{stamp}.png"
    else:
        path.parent.mkdir(parents=True, exist_ok=True)

    render_board_image(board, caption).save(path, "PNG")
    logger.debug(f"Debug image saved: {path}")

    _cleanup_debug_images()
    return path


def _cleanup_debug_images() -> None:
    """Remove old debug images, keeping only the most recent MAX_DEBUG_IMAGES."""
    if not DEBUG_DIR.exists():
        return

    debug_files = sorted(
        DEBUG_DIR.glob("debug_*.png"),
        key=lambda p: p.stat().st_mtime,
        reverse=True
    )

    for old_file in debug_files[MAX_DEBUG_IMAGES:]:
        try:
            old_file.unlink()
        except OSError as e:
            logger.warning(f"Could not remove old debug image {old_file}: {e}")
