from __future__ import annotations

import pytest

from zinepress.imposition.core import Page
from zinepress.imposition.errors import EmptyDocumentError, MalformedImpositionError
from zinepress.imposition.layouts import saddle_stitch_plan
from zinepress.imposition.unimpose import (
    LinearPageSource,
    check_orientation,
    imposed_order,
    resolve_linear_order,
    unimpose_plan,
)

pytestmark = pytest.mark.unit


def test_imposed_order_matches_forward_saddle_stitch() -> None:
    assert imposed_order(8) == [8, 1, 2, 7, 6, 3, 4, 5]


def test_resolve_linear_order_for_single_sheet() -> None:
    assert resolve_linear_order(2) == (
        LinearPageSource(linear_page=1, imposed_index=0, side="right"),
        LinearPageSource(linear_page=2, imposed_index=1, side="left"),
        LinearPageSource(linear_page=3, imposed_index=1, side="right"),
        LinearPageSource(linear_page=4, imposed_index=0, side="left"),
    )


@pytest.mark.parametrize("page_count", [4, 8, 12, 16, 20, 32, 48, 64, 100])
def test_unimpose_round_trips_saddle_stitch(page_count: int) -> None:
    plan = saddle_stitch_plan(page_count)
    halves = [
        slot.content.index
        for side in plan.iter_sides()
        for slot in side.slots
        if isinstance(slot.content, Page)
    ]
    assert len(halves) == plan.side_count * 2

    recovered = [
        halves[source.imposed_index * 2 + (0 if source.side == "left" else 1)]
        for source in resolve_linear_order(plan.side_count)
    ]
    assert recovered == list(range(1, page_count + 1))


@pytest.mark.parametrize("imposed_page_count", [1, 3, 5, 11])
def test_odd_imposed_count_is_malformed(imposed_page_count: int) -> None:
    linear = imposed_page_count * 2
    with pytest.raises(MalformedImpositionError, match=f"{linear} extracted pages is not a multiple of 4"):
        resolve_linear_order(imposed_page_count)


def test_zero_imposed_pages_is_empty() -> None:
    with pytest.raises(EmptyDocumentError):
        resolve_linear_order(0)


@pytest.mark.parametrize(("width", "height"), [(612, 792), (500, 500)])
def test_check_orientation_rejects_non_landscape(width: float, height: float) -> None:
    with pytest.raises(MalformedImpositionError, match="Expected landscape orientation"):
        check_orientation(width, height)


def test_check_orientation_accepts_landscape() -> None:
    check_orientation(792, 612)


def test_unimpose_plan_emits_one_cropped_portrait_page_per_linear_page() -> None:
    plan = unimpose_plan(4)

    assert plan.total_pages == 4
    assert plan.padded_pages == 8
    assert len(plan.sheets) == 8
    first = plan.sheets[0]
    assert first.back is None
    assert (first.front.width, first.front.height) == (612, 792)
    assert [(side.slots[0].content, side.slots[0].crop) for side in plan.iter_sides()] == [
        (Page(1), "right"),
        (Page(2), "left"),
        (Page(3), "right"),
        (Page(4), "left"),
        (Page(4), "right"),
        (Page(3), "left"),
        (Page(2), "right"),
        (Page(1), "left"),
    ]
