from __future__ import annotations

from dataclasses import dataclass

from zinepress.imposition.core import Rect, Rotation


@dataclass(frozen=True)
class Fit:
    scale: float
    draw_width: float
    draw_height: float
    offset_x: float
    offset_y: float


def fit(src_width: float, src_height: float, box_width: float, box_height: float) -> Fit:
    """Uniformly scale a source page into a box and centre it.

    Offsets are relative to the box origin. A zero-sized source page yields a
    zero-sized draw area in the middle of the box.
    """
    if src_width <= 0 or src_height <= 0:
        return Fit(
            scale=0.0,
            draw_width=0.0,
            draw_height=0.0,
            offset_x=max(box_width, 0.0) / 2.0,
            offset_y=max(box_height, 0.0) / 2.0,
        )

    scale = min(box_width / src_width, box_height / src_height)
    # Clamp rounding noise so the draw area never spills outside the box.
    draw_width = min(src_width * scale, box_width)
    draw_height = min(src_height * scale, box_height)
    return Fit(
        scale=scale,
        draw_width=draw_width,
        draw_height=draw_height,
        offset_x=max((box_width - draw_width) / 2.0, 0.0),
        offset_y=max((box_height - draw_height) / 2.0, 0.0),
    )


def placement_origin(box: Rect, placement: Fit, rotation: Rotation = 0) -> tuple[float, float]:
    """Sheet coordinates the renderer anchors the page at.

    Rotating by 180 degrees turns the page around its origin, so the origin is
    moved to the far corner of the draw area to keep the result inside the box.
    """
    x = box.x + placement.offset_x
    y = box.y + placement.offset_y
    if rotation == 180:
        return x + placement.draw_width, y + placement.draw_height
    return x, y


def split_columns(box: Rect, count: int) -> tuple[Rect, ...]:
    if count <= 0:
        raise ValueError("count must be > 0")

    width = box.width / count
    return tuple(Rect(box.x + index * width, box.y, width, box.height) for index in range(count))


def split_rows(box: Rect, count: int) -> tuple[Rect, ...]:
    """Rows ordered top to bottom (PDF y grows upward)."""
    if count <= 0:
        raise ValueError("count must be > 0")

    height = box.height / count
    return tuple(
        Rect(box.x, box.y + box.height - (index + 1) * height, box.width, height) for index in range(count)
    )


def sheet_box(width: float, height: float) -> Rect:
    return Rect(0.0, 0.0, width, height)
