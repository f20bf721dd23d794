from restock_parser.completion.factory import CompletionClientFactory
from restock_parser.config.settings import Settings
from restock_parser.extraction.models import ParsedItem
from restock_parser.extraction.prompt_builder import PromptBuilder
from restock_parser.logging.logger import Log
from restock_parser.pdf.factory import PdfExtractorFactory
from restock_parser.processor.exceptions import (
    DocumentRejectedError,
    ExtractionFailedError,
    ProcessorError,
)
from restock_parser.processor.models import (
    ParseFailure,
    ParseResult,
    ParseSuccess,
    PipelineState,
    RawDocument,
)
from restock_parser.processor.pipeline import PipelineContext, PipelineStep
from restock_parser.processor.steps import (
    NO_ITEMS_MESSAGE,
    CheckDocumentStep,
    ExtractTextStep,
    NormalizeItemsStep,
    SegmentBlocksStep,
    TextCompletionStep,
    VisionCompletionStep,
    normalize_items,
)

DEFAULT_MAX_DOCUMENT_BYTES = 10 * 1024 * 1024
DEFAULT_MAX_IMAGES = 10


class Processor:
    """Orchestrates the document parsing pipeline.

    Pipeline: check -> extract text -> segment -> text completion
    -> vision completion (only when no items yet) -> normalize.
    Only the input check and the vision tier can end a run with a failure;
    every other stage degrades to the next one.
    """

    def __init__(
        self,
        steps: list[PipelineStep],
        image_steps: list[PipelineStep] | None = None,
        max_images: int = DEFAULT_MAX_IMAGES,
        max_batch_bytes: int = DEFAULT_MAX_DOCUMENT_BYTES,
    ) -> None:
        self._steps = steps
        self._image_steps = image_steps or []
        self._max_images = max_images
        self._max_batch_bytes = max_batch_bytes

    def parse(self, document: RawDocument) -> ParseResult:
        """Run the full pipeline for one document."""
        context = PipelineContext(document=document)
        try:
            for step in self._steps:
                context = step.run(context)
        except ProcessorError as exc:
            return self._fail(context, exc)
        except Exception as exc:
            Log.exception(f"Unexpected error while parsing document: {exc}")
            return self._fail(
                context, ExtractionFailedError("Unexpected error while parsing document")
            )

        context.advance(PipelineState.DONE)
        Log.info(f"Parsed document: {len(context.items)} items")
        return ParseSuccess(items=context.items)

    def parse_images(self, documents: list[RawDocument]) -> ParseResult:
        """Run the vision tier over pre-rendered page images.

        A page that fails is skipped; the batch fails only when no page
        yields an item.
        """
        try:
            self._check_image_batch(documents)
        except DocumentRejectedError as exc:
            Log.warning(f"Image batch rejected: {exc.message}")
            return ParseFailure(error=exc.code, message=exc.message, status=exc.status)

        parsed_items: list[ParsedItem] = []
        for index, document in enumerate(documents, start=1):
            context = PipelineContext(document=document)
            try:
                for step in self._image_steps:
                    context = step.run(context)
            except ExtractionFailedError as exc:
                Log.warning(f"Image {index}/{len(documents)} yielded no items: {exc.message}")
                continue
            except Exception as exc:
                Log.exception(f"Image {index}/{len(documents)} failed unexpectedly: {exc}")
                continue
            Log.info(f"Image {index}/{len(documents)}: {len(context.parsed.items)} items")
            parsed_items.extend(context.parsed.items)

        items = normalize_items(parsed_items)
        if not items:
            return ParseFailure(error="NO_ITEMS_FOUND", message=NO_ITEMS_MESSAGE, status=500)
        Log.info(f"Parsed {len(documents)} image(s): {len(items)} items")
        return ParseSuccess(items=items)

    def _check_image_batch(self, documents: list[RawDocument]) -> None:
        if not documents:
            raise DocumentRejectedError("No images uploaded", code="NO_IMAGES")
        if len(documents) > self._max_images:
            raise DocumentRejectedError(
                f"Too many images (limit {self._max_images})", code="TOO_MANY_IMAGES"
            )
        total = sum(document.declared_size for document in documents)
        if total > self._max_batch_bytes:
            raise DocumentRejectedError(
                f"Total image size too large (limit {self._max_batch_bytes // (1024 * 1024)} MB)",
                code="FILE_TOO_LARGE",
                status=413,
            )
        if any(not document.is_image for document in documents):
            raise DocumentRejectedError(
                "All files must be images", code="UNSUPPORTED_MEDIA_TYPE"
            )

    @staticmethod
    def _fail(context: PipelineContext, exc: ProcessorError) -> ParseFailure:
        context.error_message = exc.message
        context.advance(PipelineState.FAILED)
        Log.error(f"Document parsing failed [{exc.code}]: {exc.message}")
        return ParseFailure(error=exc.code, message=exc.message, status=exc.status)


def build_processor(settings: Settings) -> Processor:
    """Build a Processor with all required adapters."""
    pdf_extractor = PdfExtractorFactory.create(settings)
    completer = CompletionClientFactory.create(settings)
    prompt_builder = PromptBuilder()
    vision_step = VisionCompletionStep(completer=completer, prompt_builder=prompt_builder)
    steps: list[PipelineStep] = [
        CheckDocumentStep(max_bytes=settings.max_document_bytes),
        ExtractTextStep(pdf_extractor=pdf_extractor),
        SegmentBlocksStep(),
        TextCompletionStep(completer=completer, prompt_builder=prompt_builder),
        vision_step,
        NormalizeItemsStep(),
    ]
    return Processor(
        steps=steps,
        image_steps=[vision_step],
        max_images=settings.max_images,
        max_batch_bytes=settings.max_document_bytes,
    )
