from __future__ import annotations

import io
import re
from dataclasses import dataclass
from pathlib import Path

from pypdf import PageObject, PdfReader, PdfWriter, Transformation
from pypdf.errors import PdfReadError
from pypdf.generic import NameObject, RectangleObject

from zinepress.imposition.core import Page, SheetSide, Slot
from zinepress.imposition.errors import LoadError
from zinepress.imposition.geometry import Fit, fit, placement_origin

_CLIP_BOX_KEYS = ("/CropBox", "/TrimBox")


@dataclass(frozen=True)
class SlotGeometry:
    name: str
    page: int
    rotation: int
    crop: str | None
    scale: float
    rendered_width: float
    rendered_height: float
    x_offset: float
    y_offset: float


def load_document(payload: bytes) -> PdfReader:
    if not payload:
        raise LoadError("The uploaded file is empty.")

    try:
        reader = PdfReader(io.BytesIO(payload))
    except PdfReadError as exc:
        raise LoadError(
            "The upload could not be parsed as a PDF. Verify the file is a valid, non-corrupted PDF and retry."
        ) from exc

    if reader.is_encrypted:
        raise LoadError("Encrypted PDFs are not supported. Remove encryption and retry.")
    return reader


def page_size(page: PageObject) -> tuple[float, float]:
    return float(page.mediabox.width), float(page.mediabox.height)


def deterministic_output_filename(source_name: str, suffix: str) -> str:
    stem = Path(source_name).stem.strip()
    if not stem:
        stem = "output"

    slug = re.sub(r"[^A-Za-z0-9]+", "_", stem).strip("_").lower()
    slug = slug or "output"
    return f"{slug}{suffix}.pdf"


def _source_bounds(source_page: PageObject, slot: Slot) -> tuple[float, float, float, float]:
    """Left, bottom, width and height of the source region a slot shows."""
    mediabox = source_page.mediabox
    left = float(mediabox.left)
    bottom = float(mediabox.bottom)
    width = float(mediabox.width)
    height = float(mediabox.height)
    if slot.crop is None:
        return left, bottom, width, height

    half_width = width / 2.0
    if slot.crop == "right":
        left += half_width
    return left, bottom, half_width, height


def _slot_transform(source_page: PageObject, slot: Slot) -> tuple[Transformation, Fit, float, float]:
    left, bottom, width, height = _source_bounds(source_page, slot)
    box = slot.fit_box
    placement = fit(width, height, box.width, box.height)
    x_offset, y_offset = placement_origin(box, placement, slot.rotation)

    transform = Transformation().translate(-left, -bottom).scale(placement.scale, placement.scale)
    if slot.rotation == 180:
        transform = transform.rotate(180)
    return transform.translate(x_offset, y_offset), placement, x_offset, y_offset


def _source_page(reader: PdfReader, page: Page) -> PageObject:
    page_count = len(reader.pages)
    if page.index > page_count:
        raise ValueError(f"page {page.index} is out of range for a {page_count}-page document")
    return reader.pages[page.index - 1]


def place_slot(imposed_page, reader: PdfReader, slot: Slot) -> SlotGeometry | None:
    content = slot.content
    if not isinstance(content, Page):
        return None

    source_page = _source_page(reader, content)
    transform, placement, x_offset, y_offset = _slot_transform(source_page, slot)

    if slot.crop is None:
        imposed_page.merge_transformed_page(source_page, transform)
    else:
        # pypdf clips merged content to the cropbox, or to the trimbox on older releases.
        left, bottom, width, height = _source_bounds(source_page, slot)
        clip = RectangleObject((left, bottom, left + width, bottom + height))
        original_boxes = {key: source_page.get(key) for key in _CLIP_BOX_KEYS}
        for key in _CLIP_BOX_KEYS:
            source_page[NameObject(key)] = clip
        try:
            imposed_page.merge_transformed_page(source_page, transform)
        finally:
            for key, original in original_boxes.items():
                if original is None:
                    del source_page[key]
                else:
                    source_page[NameObject(key)] = original

    return SlotGeometry(
        name=slot.name,
        page=content.index,
        rotation=slot.rotation,
        crop=slot.crop,
        scale=placement.scale,
        rendered_width=placement.draw_width,
        rendered_height=placement.draw_height,
        x_offset=x_offset,
        y_offset=y_offset,
    )


def render_side(writer: PdfWriter, reader: PdfReader, side: SheetSide) -> list[SlotGeometry]:
    imposed_page = writer.add_blank_page(width=side.width, height=side.height)
    placed: list[SlotGeometry] = []
    for slot in side.slots:
        geometry = place_slot(imposed_page, reader, slot)
        if geometry is not None:
            placed.append(geometry)
    return placed


def save_document(writer: PdfWriter) -> bytes:
    payload = io.BytesIO()
    writer.write(payload)
    return payload.getvalue()
