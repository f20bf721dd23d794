"""Renders the text and vision extraction prompts."""

from pathlib import Path

from restock_parser.extraction.models import SupplierBlock
from restock_parser.extraction.prompt_loader import (
    TEXT_PROMPT_FILE,
    VISION_PROMPT_FILE,
    load_output_shape,
    load_prompt_template,
)

BLOCK_SEPARATOR = "\n\n---\n\n"


class PromptBuilder:
    """Fills the bundled prompt templates.

    Templates are read once at construction so a broken installation fails
    at startup instead of on the first document.
    """

    def __init__(self, prompt_dir: Path | None = None) -> None:
        self._text_template = load_prompt_template(TEXT_PROMPT_FILE, prompt_dir)
        self._vision_template = load_prompt_template(VISION_PROMPT_FILE, prompt_dir)
        self._output_shape = load_output_shape(prompt_dir)

    def build_text_prompt(self, blocks: list[SupplierBlock]) -> str:
        content = format_blocks(blocks)
        return self._text_template.format(
            document_content=f"Document content:\n{content}" if content else "No content provided.",
            output_shape=self._output_shape,
        )

    def build_vision_prompt(self) -> str:
        return self._vision_template.format(output_shape=self._output_shape)


def format_blocks(blocks: list[SupplierBlock]) -> str:
    rendered = []
    for block in blocks:
        body = "\n".join(block.lines)
        if block.supplier_name:
            rendered.append(f"SUPPLIER: {block.supplier_name}\n{body}")
        else:
            rendered.append(body)
    return BLOCK_SEPARATOR.join(rendered)
