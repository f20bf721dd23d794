from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from restock_parser.completion.completer import CompletionResult
from restock_parser.extraction.models import ParsedDocument, SupplierBlock
from restock_parser.logging.logger import Log
from restock_parser.pdf.models import ExtractedText
from restock_parser.processor.models import NormalizedItem, PipelineState, RawDocument


@dataclass(slots=True)
class PipelineContext:
    document: RawDocument
    state: PipelineState = PipelineState.START
    history: list[PipelineState] = field(default_factory=lambda: [PipelineState.START])
    extracted_text: ExtractedText | None = None
    blocks: list[SupplierBlock] = field(default_factory=list)
    text_completion: CompletionResult | None = None
    vision_completion: CompletionResult | None = None
    parsed: ParsedDocument = field(default_factory=ParsedDocument)
    items: list[NormalizedItem] = field(default_factory=list)
    error_message: str = ""

    def advance(self, state: PipelineState) -> None:
        Log.debug(f"Pipeline {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
