from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Literal

from pypdf import PdfWriter

from zinepress.events import log_event
from zinepress.imposition.core import SheetPlan
from zinepress.imposition.errors import EmptyDocumentError, ImpositionError
from zinepress.imposition.formats import FormatDefinition, FormatRegistry, build_default_registry
from zinepress.imposition.pdf_writer import SlotGeometry, load_document, page_size, render_side, save_document
from zinepress.imposition.unimpose import check_orientation

_LOGGER = logging.getLogger("zinepress.pipeline")

ProgressStage = Literal["loading", "processing", "composing", "saving", "complete", "error"]


@dataclass(frozen=True)
class ProgressEvent:
    stage: ProgressStage
    percent: float
    message: str


ProgressSink = Callable[[ProgressEvent], None]


@dataclass(frozen=True)
class ImpositionResult:
    payload: bytes
    format: FormatDefinition
    plan: SheetPlan
    source_pages: int
    output_pages: int
    placed: tuple[tuple[SlotGeometry, ...], ...]


class _ProgressReporter:
    """Forwards checkpoints to an optional sink, never letting percent go backwards."""

    def __init__(self, sink: ProgressSink | None) -> None:
        self._sink = sink
        self.percent = 0.0

    def __call__(self, stage: ProgressStage, percent: float, message: str) -> None:
        self.percent = max(self.percent, min(percent, 100.0))
        if self._sink is not None:
            self._sink(ProgressEvent(stage=stage, percent=self.percent, message=message))


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def impose_document(
    payload: bytes,
    format_id: str,
    *,
    registry: FormatRegistry | None = None,
    progress: ProgressSink | None = None,
) -> ImpositionResult:
    """Load a PDF, lay it out for one format and return the imposed PDF bytes.

    Every check runs before the output document is created. On failure an
    ``error`` progress event is emitted and the exception propagates.
    """
    formats = registry if registry is not None else build_default_registry()
    report = _ProgressReporter(progress)

    try:
        definition = formats.get(format_id)

        report("loading", 10, "Loading PDF...")
        reader = load_document(payload)
        page_count = len(reader.pages)
        if page_count == 0:
            raise EmptyDocumentError()
        report("loading", 25, f"Loaded {_plural(page_count, 'page')}")

        report("processing", 30, f"Calculating {definition.name} layout...")
        if definition.requires_landscape:
            check_orientation(*page_size(reader.pages[0]))
        plan = definition.compute_plan(page_count)
        total_sides = plan.side_count
        report("processing", 40, f"Creating {_plural(total_sides, 'output page')}")

        writer = PdfWriter()
        placed: list[tuple[SlotGeometry, ...]] = []
        for sheet_number, sheet in enumerate(plan.sheets, start=1):
            for side in sheet.sides:
                placed.append(tuple(render_side(writer, reader, side)))
                percent = 45 + (len(placed) / total_sides) * 40
                report("composing", percent, f"Composing sheet {sheet_number} ({side.face})...")

        report("saving", 90, "Saving PDF...")
        output = save_document(writer)
        report("complete", 100, "Complete!")
    except ImpositionError as exc:
        log_event(_LOGGER, logging.WARNING, "impose.pipeline.rejected", format_id=format_id, kind=exc.kind)
        report("error", report.percent, str(exc))
        raise
    except Exception as exc:
        report("error", report.percent, str(exc))
        raise

    log_event(
        _LOGGER,
        logging.INFO,
        "impose.pipeline.completed",
        format_id=definition.id,
        source_pages=page_count,
        padded_pages=plan.padded_pages,
        sheets=len(plan.sheets),
        output_pages=total_sides,
    )
    return ImpositionResult(
        payload=output,
        format=definition,
        plan=plan,
        source_pages=page_count,
        output_pages=total_sides,
        placed=tuple(placed),
    )
