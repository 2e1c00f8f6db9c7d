from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Literal, TypeAlias

from zinepress.imposition.errors import EmptyDocumentError, PageCountOutOfRangeError

Face: TypeAlias = Literal["front", "back"]
Rotation: TypeAlias = Literal[0, 180]
CropHalf: TypeAlias = Literal["left", "right"]


@dataclass(frozen=True)
class Page:
    index: int

    def __post_init__(self) -> None:
        if self.index < 1:
            raise ValueError(f"page index must be >= 1, got {self.index}")


@dataclass(frozen=True)
class Blank:
    pass


BLANK = Blank()
SlotContent: TypeAlias = Page | Blank


def page_or_blank(page_number: int, page_count: int) -> SlotContent:
    """Page numbers beyond the source count exist only as padding."""
    if page_number > page_count:
        return BLANK
    return Page(page_number)


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Slot:
    name: str
    content: SlotContent
    fit_box: Rect
    rotation: Rotation = 0
    crop: CropHalf | None = None

    @property
    def is_blank(self) -> bool:
        return isinstance(self.content, Blank)


@dataclass(frozen=True)
class SheetSide:
    face: Face
    width: float
    height: float
    slots: tuple[Slot, ...]

    def slot(self, name: str) -> Slot:
        for slot in self.slots:
            if slot.name == name:
                return slot
        raise KeyError(f"no slot named '{name}' on the {self.face} side")

    @property
    def contents(self) -> tuple[SlotContent, ...]:
        return tuple(slot.content for slot in self.slots)


@dataclass(frozen=True)
class Sheet:
    front: SheetSide
    back: SheetSide | None = None

    @property
    def sides(self) -> tuple[SheetSide, ...]:
        if self.back is None:
            return (self.front,)
        return (self.front, self.back)


@dataclass(frozen=True)
class SheetPlan:
    sheets: tuple[Sheet, ...]
    total_pages: int
    padded_pages: int

    def iter_sides(self) -> Iterator[SheetSide]:
        for sheet in self.sheets:
            yield from sheet.sides

    @property
    def side_count(self) -> int:
        return sum(len(sheet.sides) for sheet in self.sheets)

    def placed_pages(self) -> list[int]:
        return [
            slot.content.index
            for side in self.iter_sides()
            for slot in side.slots
            if isinstance(slot.content, Page)
        ]


def require_page_count(
    page_count: int,
    *,
    label: str,
    min_pages: int = 1,
    max_pages: int | None = None,
) -> None:
    if page_count == 0:
        raise EmptyDocumentError()
    if page_count < min_pages:
        noun = "page" if min_pages == 1 else "pages"
        raise PageCountOutOfRangeError(page_count, f"{label} requires at least {min_pages} {noun}")
    if max_pages is not None and page_count > max_pages:
        raise PageCountOutOfRangeError(page_count, f"{label} supports maximum {max_pages} pages")


def pad_to_multiple_of_four(page_count: int) -> int:
    remainder = page_count % 4
    if remainder == 0:
        return page_count
    return page_count + 4 - remainder


def saddle_stitch_order(padded_pages: int) -> list[tuple[int, int, int, int]]:
    """Page numbers per sheet as (front_left, front_right, back_left, back_right).

    The outermost sheet carries the first and last pages; each following sheet
    nests one step inward, advancing two pages per side.
    """
    if padded_pages % 4 != 0:
        raise ValueError("padded_pages must be a multiple of 4")

    quartets: list[tuple[int, int, int, int]] = []
    for sheet_index in range(padded_pages // 4):
        step = 2 * sheet_index
        quartets.append(
            (
                padded_pages - step,
                1 + step,
                2 + step,
                padded_pages - 1 - step,
            )
        )
    return quartets
