from __future__ import annotations

from typing import Final

# US Letter in PDF points (72 per inch). Every layout is laid out on Letter.
LETTER_PORTRAIT: Final[tuple[float, float]] = (612.0, 792.0)
LETTER_LANDSCAPE: Final[tuple[float, float]] = (792.0, 612.0)

DEFAULT_ARTIFACT_DIR: Final[str] = "generated"
DEFAULT_ARTIFACT_RETENTION_SECONDS: Final[int] = 24 * 60 * 60
