from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator

from zinepress.imposition.core import SheetPlan
from zinepress.imposition.errors import ImpositionError, UnknownFormatError
from zinepress.imposition.layouts import (
    ACCORDION_MAX_PAGES,
    HALF_FOLD_MAX_PAGES,
    MINI_ZINE_MAX_PAGES,
    accordion_plan,
    half_fold_plan,
    mini_zine_plan,
    quarter_booklet_plan,
    saddle_stitch_plan,
    two_up_proof_plan,
)
from zinepress.imposition.unimpose import unimpose_plan

PlanFunction = Callable[[int], SheetPlan]


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    message: str | None = None


@dataclass(frozen=True)
class FormatDefinition:
    id: str
    name: str
    description: str
    input_description: str
    output_suffix: str
    print_instructions: str
    plan_function: PlanFunction
    min_pages: int = 1
    max_pages: int | None = None
    requires_landscape: bool = False

    def compute_plan(self, page_count: int) -> SheetPlan:
        return self.plan_function(page_count)

    def validate(self, page_count: int) -> ValidationResult:
        if page_count < self.min_pages:
            noun = "page" if self.min_pages == 1 else "pages"
            return ValidationResult(False, f"PDF must have at least {self.min_pages} {noun}")
        if self.max_pages is not None and page_count > self.max_pages:
            return ValidationResult(False, f"{self.name} supports maximum {self.max_pages} pages")
        try:
            self.compute_plan(page_count)
        except ImpositionError as exc:
            return ValidationResult(False, str(exc))
        return ValidationResult(True)

    def metadata(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "input_description": self.input_description,
            "output_suffix": self.output_suffix,
            "print_instructions": self.print_instructions,
            "min_pages": self.min_pages,
            "max_pages": self.max_pages,
        }


class FormatRegistry:
    """Immutable, ordered lookup of format definitions by id."""

    def __init__(self, definitions: tuple[FormatDefinition, ...] = ()) -> None:
        by_id: dict[str, FormatDefinition] = {}
        for definition in definitions:
            if definition.id in by_id:
                raise ImpositionError(f"duplicate format id '{definition.id}'")
            by_id[definition.id] = definition
        self._definitions = tuple(definitions)
        self._by_id = by_id

    def __iter__(self) -> Iterator[FormatDefinition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, format_id: object) -> bool:
        return format_id in self._by_id

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(definition.id for definition in self._definitions)

    def get(self, format_id: str) -> FormatDefinition:
        try:
            return self._by_id[format_id]
        except KeyError as exc:
            raise UnknownFormatError(format_id, self.ids) from exc

    def with_format(self, definition: FormatDefinition) -> FormatRegistry:
        return FormatRegistry((*self._definitions, definition))


SADDLE_STITCH = FormatDefinition(
    id="saddle-stitch",
    name="Booklet",
    description="Saddle-stitch booklet imposition",
    input_description="Any PDF",
    output_suffix="-imposed",
    print_instructions="print duplex / flip short edge / fold / staple",
    plan_function=saddle_stitch_plan,
)

UN_IMPOSE = FormatDefinition(
    id="un-impose",
    name="Un-impose",
    description="Convert imposed booklet back to linear pages",
    input_description="Imposed 2-up PDF",
    output_suffix="-linear",
    print_instructions="pages are now in reading order",
    plan_function=unimpose_plan,
    requires_landscape=True,
)

MINI_ZINE = FormatDefinition(
    id="mini-zine",
    name="Mini Zine",
    description="Classic 8-page single-sheet zine",
    input_description="8-page PDF (or fewer)",
    output_suffix="-mini",
    print_instructions=(
        "print duplex (flip long edge) / fold lengthwise / fold widthwise / cut center slit / fold into booklet"
    ),
    plan_function=mini_zine_plan,
    max_pages=MINI_ZINE_MAX_PAGES,
)

HALF_FOLD = FormatDefinition(
    id="half-fold",
    name="Half-Fold",
    description="Simple 4-page bi-fold card",
    input_description="4-page PDF",
    output_suffix="-halffold",
    print_instructions="print duplex (flip short edge) / fold in half",
    plan_function=half_fold_plan,
    max_pages=HALF_FOLD_MAX_PAGES,
)

QUARTER_BOOKLET = FormatDefinition(
    id="quarter-booklet",
    name="Quarter Size",
    description="Pocket-size saddle-stitch booklet (4-up)",
    input_description="Any PDF",
    output_suffix="-quarter",
    print_instructions=(
        "print duplex (flip long edge) / cut along the horizontal center / stack strips top before bottom "
        "/ fold / staple"
    ),
    plan_function=quarter_booklet_plan,
)

TWO_UP_PROOF = FormatDefinition(
    id="two-up-proof",
    name="2-Up Proof",
    description="Side-by-side pages for proofing",
    input_description="Any PDF",
    output_suffix="-2up",
    print_instructions="print for spread review",
    plan_function=two_up_proof_plan,
)

ACCORDION = FormatDefinition(
    id="accordion",
    name="Accordion",
    description="Z-fold continuous strip layout",
    input_description="4-8 page PDF",
    output_suffix="-accordion",
    print_instructions="print duplex (if 5+ pages) / cut if multiple strips / fold accordion-style",
    plan_function=accordion_plan,
    max_pages=ACCORDION_MAX_PAGES,
)


def build_default_registry() -> FormatRegistry:
    return FormatRegistry(
        (
            SADDLE_STITCH,
            UN_IMPOSE,
            MINI_ZINE,
            HALF_FOLD,
            QUARTER_BOOKLET,
            TWO_UP_PROOF,
            ACCORDION,
        )
    )
