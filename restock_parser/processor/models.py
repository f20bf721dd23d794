from dataclasses import dataclass, field
from enum import Enum

DEFAULT_MEDIA_TYPE = "application/pdf"


@dataclass(frozen=True)
class RawDocument:
    """A submitted document. Lives for one parse call and is never persisted."""

    content: bytes
    media_type: str = DEFAULT_MEDIA_TYPE
    size_bytes: int | None = None
    filename: str = ""

    @property
    def declared_size(self) -> int:
        return self.size_bytes if self.size_bytes is not None else len(self.content)

    @property
    def resolved_media_type(self) -> str:
        return (self.media_type or DEFAULT_MEDIA_TYPE).strip().lower()

    @property
    def is_pdf(self) -> bool:
        return "pdf" in self.resolved_media_type

    @property
    def is_image(self) -> bool:
        return self.resolved_media_type.startswith("image/")


@dataclass(frozen=True)
class NormalizedItem:
    """A restock item in the shape returned to callers."""

    id: str
    supplier: str
    product: str
    quantity: int | None = None

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "id": self.id,
            "supplier": self.supplier,
            "product": self.product,
        }
        if self.quantity is not None:
            data["quantity"] = self.quantity
        return data


@dataclass(frozen=True)
class ParseSuccess:
    items: list[NormalizedItem] = field(default_factory=list)

    ok = True

    def to_dict(self) -> dict[str, object]:
        return {"items": [item.to_dict() for item in self.items]}


@dataclass(frozen=True)
class ParseFailure:
    error: str
    message: str
    status: int = 500

    ok = False

    def to_dict(self) -> dict[str, object]:
        return {"error": self.error, "message": self.message}


ParseResult = ParseSuccess | ParseFailure


class PipelineState(str, Enum):
    START = "start"
    TEXT_EXTRACTED = "text_extracted"
    BLOCKS_BUILT = "blocks_built"
    TEXT_LLM_ATTEMPTED = "text_llm_attempted"
    ITEMS_FOUND = "items_found"
    VISION_ATTEMPTED = "vision_attempted"
    NORMALIZED = "normalized"
    DONE = "done"
    FAILED = "failed"
