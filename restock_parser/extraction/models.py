import math
from dataclasses import dataclass, field
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, Strict, field_validator


@dataclass
class SupplierBlock:
    """A contiguous run of report lines attributed to one supplier header."""

    supplier_name: str = ""
    lines: list[str] = field(default_factory=list)


class ParsedItem(BaseModel):
    """One restock row as returned by a completion, after schema validation."""

    model_config = ConfigDict(extra="ignore", frozen=True, str_strip_whitespace=True)

    supplier: str | None = None
    product: str = Field(min_length=1)
    quantity: Annotated[int, Strict(), Field(ge=0)] | None = None

    @field_validator("quantity", mode="before")
    @classmethod
    def _round_decimal_quantity(cls, value: object) -> object:
        """Round non-negative floats half-up; anything else is left to strict int."""
        if isinstance(value, float) and math.isfinite(value) and value >= 0:
            return math.floor(value + 0.5)
        return value


class ParsedDocument(BaseModel):
    """Validated wrapper around a completion's item list."""

    model_config = ConfigDict(frozen=True)

    items: list[ParsedItem] = Field(default_factory=list)
