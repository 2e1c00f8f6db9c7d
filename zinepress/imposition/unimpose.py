from __future__ import annotations

from dataclasses import dataclass

from zinepress.constants import LETTER_PORTRAIT
from zinepress.imposition.core import (
    CropHalf,
    Page,
    Sheet,
    SheetPlan,
    SheetSide,
    Slot,
    require_page_count,
    saddle_stitch_order,
)
from zinepress.imposition.errors import MalformedImpositionError
from zinepress.imposition.geometry import sheet_box


@dataclass(frozen=True)
class LinearPageSource:
    linear_page: int
    imposed_index: int
    side: CropHalf


def imposed_order(linear_page_count: int) -> list[int]:
    """Linear page numbers in the order saddle-stitch imposition placed them."""
    order: list[int] = []
    for quartet in saddle_stitch_order(linear_page_count):
        order.extend(quartet)
    return order


def check_orientation(width: float, height: float) -> None:
    if width <= height:
        raise MalformedImpositionError("Expected landscape orientation. This PDF may not be imposed.")


def resolve_linear_order(imposed_page_count: int) -> tuple[LinearPageSource, ...]:
    """Map each linear page back to the imposed page and half it came from.

    Runs the forward saddle-stitch order over the linear count and inverts it,
    two entries per imposed page (left half, then right half).
    """
    require_page_count(imposed_page_count, label="Un-impose")

    linear_page_count = imposed_page_count * 2
    if linear_page_count % 4 != 0:
        raise MalformedImpositionError(
            f"Invalid imposed PDF: {linear_page_count} extracted pages is not a multiple of 4"
        )

    sources: dict[int, LinearPageSource] = {}
    for position, linear_page in enumerate(imposed_order(linear_page_count)):
        sources[linear_page] = LinearPageSource(
            linear_page=linear_page,
            imposed_index=position // 2,
            side="left" if position % 2 == 0 else "right",
        )

    return tuple(sources[linear_page] for linear_page in range(1, linear_page_count + 1))


def unimpose_plan(imposed_page_count: int) -> SheetPlan:
    width, height = LETTER_PORTRAIT
    sources = resolve_linear_order(imposed_page_count)
    sheets = tuple(
        Sheet(
            front=SheetSide(
                face="front",
                width=width,
                height=height,
                slots=(
                    Slot(
                        name="page",
                        content=Page(source.imposed_index + 1),
                        fit_box=sheet_box(width, height),
                        crop=source.side,
                    ),
                ),
            )
        )
        for source in sources
    )
    return SheetPlan(sheets=sheets, total_pages=imposed_page_count, padded_pages=len(sources))
