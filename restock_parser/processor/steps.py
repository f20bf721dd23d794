import time

from restock_parser.completion.completer import Completer, CompletionKind, to_data_url
from restock_parser.extraction.blocks import segment_or_fallback
from restock_parser.extraction.models import ParsedItem
from restock_parser.extraction.prompt_builder import PromptBuilder
from restock_parser.extraction.validator import validate
from restock_parser.logging.logger import Log
from restock_parser.normalization.normalizer import normalize_product, normalize_supplier
from restock_parser.pdf.base import BasePdfExtractor
from restock_parser.processor.exceptions import DocumentRejectedError, ExtractionFailedError
from restock_parser.processor.models import NormalizedItem, PipelineState, RawDocument
from restock_parser.processor.pipeline import PipelineContext, PipelineStep

NO_ITEMS_MESSAGE = "Could not extract any items from the document"


def check_document(document: RawDocument, max_bytes: int) -> None:
    """Reject oversized or unsupported submissions.

    Raises:
        DocumentRejectedError: with a size- or type-specific code.
    """
    if document.declared_size > max_bytes:
        raise DocumentRejectedError(
            f"File too large (limit {max_bytes // (1024 * 1024)} MB)",
            code="FILE_TOO_LARGE",
            status=413,
        )
    if not document.is_pdf and not document.is_image:
        raise DocumentRejectedError(
            "Only PDF and image files are supported",
            code="UNSUPPORTED_MEDIA_TYPE",
            status=400,
        )


def normalize_items(parsed_items: list[ParsedItem]) -> list[NormalizedItem]:
    """Normalize names and assign request-scoped ids (``parsed-<ms>-<index>``)."""
    stamp = time.time_ns() // 1_000_000
    items: list[NormalizedItem] = []
    for item in parsed_items:
        product = normalize_product(item.product)
        if not product:
            continue
        items.append(
            NormalizedItem(
                id=f"parsed-{stamp}-{len(items)}",
                supplier=normalize_supplier(item.supplier) if item.supplier else "",
                product=product,
                quantity=item.quantity,
            )
        )
    return items


class CheckDocumentStep(PipelineStep):
    def __init__(self, max_bytes: int) -> None:
        self._max_bytes = max_bytes

    def run(self, context: PipelineContext) -> PipelineContext:
        check_document(context.document, self._max_bytes)
        Log.info(
            f"Accepted {context.document.resolved_media_type} document "
            f"({context.document.declared_size} bytes)"
        )
        return context


class ExtractTextStep(PipelineStep):
    def __init__(self, pdf_extractor: BasePdfExtractor) -> None:
        self._pdf_extractor = pdf_extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.document.is_pdf:
            Log.info("Image document, no text layer to extract")
            return context
        context.extracted_text = self._pdf_extractor.extract(context.document.content)
        if context.extracted_text is None:
            Log.info("PDF has no text layer, continuing with vision extraction")
            return context
        context.advance(PipelineState.TEXT_EXTRACTED)
        Log.info(f"Extracted {len(context.extracted_text.text)} chars of text")
        return context


class SegmentBlocksStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extracted_text is None:
            return context
        context.blocks = segment_or_fallback(context.extracted_text.text)
        context.advance(PipelineState.BLOCKS_BUILT)
        named = sum(1 for block in context.blocks if block.supplier_name)
        Log.info(f"Segmented text into {len(context.blocks)} block(s), {named} with a supplier header")
        return context


class TextCompletionStep(PipelineStep):
    def __init__(self, completer: Completer, prompt_builder: PromptBuilder) -> None:
        self._completer = completer
        self._prompt_builder = prompt_builder

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.blocks:
            return context
        prompt = self._prompt_builder.build_text_prompt(context.blocks)
        Log.debug(f"Text extraction prompt:\n{prompt}")
        result = self._completer.complete(prompt, CompletionKind.TEXT)
        context.text_completion = result
        context.advance(PipelineState.TEXT_LLM_ATTEMPTED)
        if not result.ok:
            Log.warning(f"Text completion failed, falling back to vision: {result.error}")
            return context
        context.parsed = validate(result.content)
        if context.parsed.items:
            context.advance(PipelineState.ITEMS_FOUND)
            Log.info(f"Text completion found {len(context.parsed.items)} items")
        else:
            Log.info("Text completion found no items, falling back to vision")
        return context


class VisionCompletionStep(PipelineStep):
    """Last extraction tier; a failure here ends the pipeline."""

    def __init__(self, completer: Completer, prompt_builder: PromptBuilder) -> None:
        self._completer = completer
        self._prompt_builder = prompt_builder

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.parsed.items:
            return context
        document = context.document
        context.advance(PipelineState.VISION_ATTEMPTED)
        result = self._completer.complete(
            self._prompt_builder.build_vision_prompt(),
            CompletionKind.VISION,
            image_data_url=to_data_url(document.content, document.resolved_media_type),
        )
        context.vision_completion = result
        if not result.ok:
            raise ExtractionFailedError(result.error or "Failed to parse document")
        context.parsed = validate(result.content)
        if not context.parsed.items:
            raise ExtractionFailedError(NO_ITEMS_MESSAGE, code="NO_ITEMS_FOUND")
        context.advance(PipelineState.ITEMS_FOUND)
        Log.info(f"Vision completion found {len(context.parsed.items)} items")
        return context


class NormalizeItemsStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        context.items = normalize_items(context.parsed.items)
        context.advance(PipelineState.NORMALIZED)
        return context
