from __future__ import annotations

import math
from typing import Final, Sequence

from zinepress.constants import LETTER_LANDSCAPE, LETTER_PORTRAIT
from zinepress.imposition.core import (
    BLANK,
    Face,
    Rotation,
    Sheet,
    SheetPlan,
    SheetSide,
    Slot,
    SlotContent,
    page_or_blank,
    pad_to_multiple_of_four,
    require_page_count,
    saddle_stitch_order,
)
from zinepress.imposition.geometry import sheet_box, split_columns, split_rows

HALF_FOLD_MAX_PAGES: Final[int] = 4
MINI_ZINE_MAX_PAGES: Final[int] = 8
ACCORDION_PANELS_PER_SIDE: Final[int] = 4
ACCORDION_MAX_PAGES: Final[int] = ACCORDION_PANELS_PER_SIDE * 2

# (page number, rotated) per panel, left to right. The order encodes the
# physical fold sequence of a one-cut zine and is not derived from a formula.
MINI_ZINE_FRONT_PANELS: Final[tuple[tuple[int, bool], ...]] = ((4, True), (5, False), (8, True), (1, False))
MINI_ZINE_BACK_PANELS: Final[tuple[tuple[int, bool], ...]] = ((2, False), (7, True), (6, False), (3, True))

QUADRANT_NAMES: Final[tuple[tuple[str, str], ...]] = (("TL", "TR"), ("BL", "BR"))


def _rotation(rotated: bool) -> Rotation:
    return 180 if rotated else 0


def spread_side(face: Face, left: SlotContent, right: SlotContent) -> SheetSide:
    """Landscape Letter side split into a left and a right half."""
    width, height = LETTER_LANDSCAPE
    left_box, right_box = split_columns(sheet_box(width, height), 2)
    return SheetSide(
        face=face,
        width=width,
        height=height,
        slots=(
            Slot(name="left", content=left, fit_box=left_box),
            Slot(name="right", content=right, fit_box=right_box),
        ),
    )


def _panel_side(face: Face, panels: Sequence[tuple[SlotContent, bool]]) -> SheetSide:
    width, height = LETTER_PORTRAIT
    boxes = split_columns(sheet_box(width, height), len(panels))
    return SheetSide(
        face=face,
        width=width,
        height=height,
        slots=tuple(
            Slot(name=f"panel-{index}", content=content, fit_box=box, rotation=_rotation(rotated))
            for index, ((content, rotated), box) in enumerate(zip(panels, boxes))
        ),
    )


def saddle_stitch_plan(page_count: int) -> SheetPlan:
    require_page_count(page_count, label="Booklet")

    padded = pad_to_multiple_of_four(page_count)
    sheets: list[Sheet] = []
    for front_left, front_right, back_left, back_right in saddle_stitch_order(padded):
        sheets.append(
            Sheet(
                front=spread_side(
                    "front",
                    page_or_blank(front_left, page_count),
                    page_or_blank(front_right, page_count),
                ),
                back=spread_side(
                    "back",
                    page_or_blank(back_left, page_count),
                    page_or_blank(back_right, page_count),
                ),
            )
        )

    return SheetPlan(sheets=tuple(sheets), total_pages=page_count, padded_pages=padded)


def _quarter_side(face: Face, rows: Sequence[tuple[SlotContent, SlotContent]]) -> SheetSide:
    width, height = LETTER_PORTRAIT
    slots: list[Slot] = []
    for row_box, names, (left, right) in zip(split_rows(sheet_box(width, height), 2), QUADRANT_NAMES, rows):
        left_box, right_box = split_columns(row_box, 2)
        slots.append(Slot(name=names[0], content=left, fit_box=left_box))
        slots.append(Slot(name=names[1], content=right, fit_box=right_box))
    return SheetSide(face=face, width=width, height=height, slots=tuple(slots))


def quarter_booklet_plan(page_count: int) -> SheetPlan:
    """Two saddle-stitch mini-sheets per physical sheet, one per row.

    Mini-sheet k lands in the top row of physical sheet k // 2 when k is even
    and in the bottom row otherwise, on both faces. Cutting the sheet along
    its horizontal centre line gives strips that fold exactly like ungrouped
    saddle-stitch sheets.
    """
    require_page_count(page_count, label="Quarter booklet")

    mini_plan = saddle_stitch_plan(page_count)
    blank_row = (BLANK, BLANK)
    sheets: list[Sheet] = []
    for start in range(0, len(mini_plan.sheets), 2):
        pair = mini_plan.sheets[start : start + 2]
        front_rows = [mini_sheet.front.contents for mini_sheet in pair]
        back_rows = [mini_sheet.back.contents for mini_sheet in pair if mini_sheet.back is not None]
        while len(front_rows) < 2:
            front_rows.append(blank_row)
            back_rows.append(blank_row)

        sheets.append(
            Sheet(
                front=_quarter_side("front", front_rows),
                back=_quarter_side("back", back_rows),
            )
        )

    return SheetPlan(sheets=tuple(sheets), total_pages=page_count, padded_pages=mini_plan.padded_pages)


def mini_zine_plan(page_count: int) -> SheetPlan:
    require_page_count(page_count, label="Mini zine", max_pages=MINI_ZINE_MAX_PAGES)

    width, height = LETTER_PORTRAIT
    top_row = split_rows(sheet_box(width, height), 2)[0]
    boxes = split_columns(top_row, len(MINI_ZINE_FRONT_PANELS))

    def side(face: Face, table: tuple[tuple[int, bool], ...]) -> SheetSide:
        return SheetSide(
            face=face,
            width=width,
            height=height,
            slots=tuple(
                Slot(
                    name=f"panel-{index}",
                    content=page_or_blank(page_number, page_count),
                    fit_box=box,
                    rotation=_rotation(rotated),
                )
                for index, ((page_number, rotated), box) in enumerate(zip(table, boxes))
            ),
        )

    sheet = Sheet(front=side("front", MINI_ZINE_FRONT_PANELS), back=side("back", MINI_ZINE_BACK_PANELS))
    return SheetPlan(sheets=(sheet,), total_pages=page_count, padded_pages=MINI_ZINE_MAX_PAGES)


def half_fold_plan(page_count: int) -> SheetPlan:
    require_page_count(page_count, label="Half-fold", max_pages=HALF_FOLD_MAX_PAGES)

    sheet = Sheet(
        front=spread_side("front", page_or_blank(4, page_count), page_or_blank(1, page_count)),
        back=spread_side("back", page_or_blank(2, page_count), page_or_blank(3, page_count)),
    )
    return SheetPlan(sheets=(sheet,), total_pages=page_count, padded_pages=HALF_FOLD_MAX_PAGES)


def two_up_proof_plan(page_count: int) -> SheetPlan:
    require_page_count(page_count, label="2-up proof")

    spread_count = math.ceil(page_count / 2)
    sheets = tuple(
        Sheet(
            front=spread_side(
                "front",
                page_or_blank(2 * spread + 1, page_count),
                page_or_blank(2 * spread + 2, page_count),
            )
        )
        for spread in range(spread_count)
    )
    return SheetPlan(sheets=sheets, total_pages=page_count, padded_pages=spread_count * 2)


def accordion_plan(page_count: int) -> SheetPlan:
    """Continuous strip with alternating 180 degree panels.

    Up to four pages print single-sided. Beyond that the back carries the
    remaining pages in reverse panel order with the rotation phase flipped,
    because turning the sheet over also reverses left and right.
    """
    require_page_count(page_count, label="Accordion fold", max_pages=ACCORDION_MAX_PAGES)

    front_count = min(page_count, ACCORDION_PANELS_PER_SIDE)
    front = _panel_side(
        "front",
        [(page_or_blank(index + 1, page_count), index % 2 == 1) for index in range(front_count)],
    )
    if page_count <= ACCORDION_PANELS_PER_SIDE:
        return SheetPlan(sheets=(Sheet(front=front),), total_pages=page_count, padded_pages=page_count)

    back_count = page_count - ACCORDION_PANELS_PER_SIDE
    back_panels: list[tuple[SlotContent, bool]] = []
    for position in range(back_count):
        offset = back_count - 1 - position
        back_panels.append(
            (page_or_blank(ACCORDION_PANELS_PER_SIDE + 1 + offset, page_count), offset % 2 == 0)
        )

    sheet = Sheet(front=front, back=_panel_side("back", back_panels))
    return SheetPlan(sheets=(sheet,), total_pages=page_count, padded_pages=page_count)
