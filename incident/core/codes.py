# incident/core/codes.py
from __future__ import annotations

from typing import Final


# ---- names of the incidents raised by the package itself (stable public contract) ----
# variants
UNKNOWN_VARIANT: Final[str] = "UnknownVariant"
INVALID_VARIANT_DATA: Final[str] = "InvalidVariantData"
NON_EXHAUSTIVE_HANDLERS: Final[str] = "NonExhaustiveHandlers"

