from __future__ import annotations

import io
from typing import Callable

import pytest
from pypdf import PdfReader, PdfWriter

PdfBytesFactory = Callable[..., bytes]
PdfReaderFactory = Callable[..., PdfReader]


def _build_pdf(page_count: int, *, width: float = 612, height: float = 792, encrypted: bool = False) -> bytes:
    writer = PdfWriter()
    for _ in range(page_count):
        writer.add_blank_page(width=width, height=height)
    if encrypted:
        writer.encrypt("secret")

    payload = io.BytesIO()
    writer.write(payload)
    return payload.getvalue()


@pytest.fixture
def pdf_bytes() -> PdfBytesFactory:
    """Blank in-memory PDFs; portrait Letter unless a size is given."""
    return _build_pdf


@pytest.fixture
def pdf_reader() -> PdfReaderFactory:
    def build(page_count: int, *, width: float = 612, height: float = 792) -> PdfReader:
        return PdfReader(io.BytesIO(_build_pdf(page_count, width=width, height=height)))

    return build


@pytest.fixture
def output_page_sizes() -> Callable[[bytes], list[tuple[float, float]]]:
    def sizes(payload: bytes) -> list[tuple[float, float]]:
        reader = PdfReader(io.BytesIO(payload))
        return [(float(page.mediabox.width), float(page.mediabox.height)) for page in reader.pages]

    return sizes
