from zinepress.imposition.core import (
    BLANK,
    Blank,
    Page,
    Rect,
    Sheet,
    SheetPlan,
    SheetSide,
    Slot,
    SlotContent,
    pad_to_multiple_of_four,
    saddle_stitch_order,
)
from zinepress.imposition.errors import (
    EmptyDocumentError,
    ImpositionError,
    LoadError,
    MalformedImpositionError,
    PageCountOutOfRangeError,
    UnknownFormatError,
)
from zinepress.imposition.formats import (
    FormatDefinition,
    FormatRegistry,
    ValidationResult,
    build_default_registry,
)
from zinepress.imposition.geometry import Fit, fit, placement_origin
from zinepress.imposition.layouts import (
    accordion_plan,
    half_fold_plan,
    mini_zine_plan,
    quarter_booklet_plan,
    saddle_stitch_plan,
    two_up_proof_plan,
)
from zinepress.imposition.pipeline import ImpositionResult, ProgressEvent, impose_document
from zinepress.imposition.unimpose import LinearPageSource, resolve_linear_order, unimpose_plan

__all__ = [
    "BLANK",
    "Blank",
    "EmptyDocumentError",
    "Fit",
    "FormatDefinition",
    "FormatRegistry",
    "ImpositionError",
    "ImpositionResult",
    "LinearPageSource",
    "LoadError",
    "MalformedImpositionError",
    "Page",
    "PageCountOutOfRangeError",
    "ProgressEvent",
    "Rect",
    "Sheet",
    "SheetPlan",
    "SheetSide",
    "Slot",
    "SlotContent",
    "UnknownFormatError",
    "ValidationResult",
    "accordion_plan",
    "build_default_registry",
    "fit",
    "half_fold_plan",
    "impose_document",
    "mini_zine_plan",
    "pad_to_multiple_of_four",
    "placement_origin",
    "quarter_booklet_plan",
    "resolve_linear_order",
    "saddle_stitch_order",
    "saddle_stitch_plan",
    "two_up_proof_plan",
    "unimpose_plan",
]
