from __future__ import annotations

import pytest

from zinepress.imposition.core import Rect
from zinepress.imposition.geometry import fit, placement_origin, split_columns, split_rows

pytestmark = pytest.mark.unit


def test_fit_scales_portrait_page_into_landscape_half() -> None:
    placement = fit(612, 792, 396, 612)

    assert placement.scale == pytest.approx(396 / 612)
    assert placement.draw_width == pytest.approx(396)
    assert placement.draw_height == pytest.approx(792 * 396 / 612)
    assert placement.offset_x == pytest.approx(0)
    assert placement.offset_y == pytest.approx((612 - 792 * 396 / 612) / 2)


def test_fit_keeps_aspect_ratio_when_upscaling() -> None:
    placement = fit(100, 50, 400, 400)

    assert placement.scale == pytest.approx(4)
    assert (placement.draw_width, placement.draw_height) == pytest.approx((400, 200))
    assert (placement.offset_x, placement.offset_y) == pytest.approx((0, 100))


@pytest.mark.parametrize(
    ("src_width", "src_height", "box_width", "box_height"),
    [
        (612, 792, 396, 612),
        (792, 612, 153, 396),
        (595.2756, 841.8898, 306, 396),
        (1, 1000, 198, 612),
        (1000, 1, 198, 612),
        (3, 7, 3, 7),
        (0.1, 0.3, 0.7, 0.9),
    ],
)
def test_fit_never_exceeds_box_and_offsets_are_non_negative(
    src_width: float,
    src_height: float,
    box_width: float,
    box_height: float,
) -> None:
    placement = fit(src_width, src_height, box_width, box_height)

    assert placement.draw_width <= box_width
    assert placement.draw_height <= box_height
    assert placement.offset_x >= 0
    assert placement.offset_y >= 0


def test_fit_zero_sized_source_is_a_no_op() -> None:
    placement = fit(0, 0, 100, 50)

    assert placement.scale == 0
    assert (placement.draw_width, placement.draw_height) == (0, 0)
    assert (placement.offset_x, placement.offset_y) == (50, 25)


def test_placement_origin_shifts_rotated_content_to_far_corner() -> None:
    box = Rect(100, 20, 200, 400)
    placement = fit(100, 100, 200, 400)

    assert placement_origin(box, placement, 0) == pytest.approx((100, 120))
    assert placement_origin(box, placement, 180) == pytest.approx((300, 320))


def test_split_columns_runs_left_to_right() -> None:
    columns = split_columns(Rect(0, 10, 400, 100), 4)

    assert [column.x for column in columns] == [0, 100, 200, 300]
    assert all(column.width == 100 and column.y == 10 for column in columns)


def test_split_rows_runs_top_to_bottom() -> None:
    top, bottom = split_rows(Rect(0, 0, 612, 792), 2)

    assert top == Rect(0, 396, 612, 396)
    assert bottom == Rect(0, 0, 612, 396)


@pytest.mark.parametrize("splitter", [split_columns, split_rows])
def test_split_rejects_non_positive_count(splitter) -> None:  # type: ignore[no-untyped-def]
    with pytest.raises(ValueError, match="count must be > 0"):
        splitter(Rect(0, 0, 1, 1), 0)
