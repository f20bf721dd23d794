"""The prompt text is the only thing steering quantity interpretation, so the
rules it must carry are asserted here verbatim."""

from pathlib import Path

import pytest

from restock_parser.extraction.exceptions import PromptLoadError
from restock_parser.extraction.models import SupplierBlock
from restock_parser.extraction.prompt_builder import PromptBuilder, format_blocks


@pytest.fixture()
def builder() -> PromptBuilder:
    return PromptBuilder()


@pytest.fixture()
def text_prompt(builder: PromptBuilder) -> str:
    return builder.build_text_prompt([SupplierBlock("Acme", ["14001 Widget A 8.49 6.000"])])


@pytest.fixture()
def vision_prompt(builder: PromptBuilder) -> str:
    return builder.build_vision_prompt()


class TestFormatBlocks:
    def test_named_block_gets_supplier_line(self) -> None:
        rendered = format_blocks([SupplierBlock("Acme", ["Widget A", "Widget B"])])
        assert rendered == "SUPPLIER: Acme\nWidget A\nWidget B"

    def test_unnamed_block_renders_lines_only(self) -> None:
        assert format_blocks([SupplierBlock("", ["Product A", "Product B"])]) == "Product A\nProduct B"

    def test_blocks_are_separated(self) -> None:
        rendered = format_blocks([SupplierBlock("A", ["x"]), SupplierBlock("B", ["y"])])
        assert rendered == "SUPPLIER: A\nx\n\n---\n\nSUPPLIER: B\ny"


class TestTextPrompt:
    def test_embeds_document_content(self, text_prompt: str) -> None:
        assert "Document content:\nSUPPLIER: Acme\n14001 Widget A 8.49 6.000" in text_prompt

    def test_empty_blocks(self, builder: PromptBuilder) -> None:
        prompt = builder.build_text_prompt([])
        assert "No content provided." in prompt
        assert '"items"' in prompt

    def test_content_with_braces_is_kept_verbatim(self, builder: PromptBuilder) -> None:
        prompt = builder.build_text_prompt([SupplierBlock("", ["Widget {large}"])])
        assert "Widget {large}" in prompt

    def test_embeds_output_shape(self, text_prompt: str) -> None:
        assert '"supplier": "<string or empty>"' in text_prompt
        assert "{output_shape}" not in text_prompt
        assert "no markdown, no comments, no extra text" in text_prompt

    def test_decimal_quantity_rule(self, text_prompt: str) -> None:
        assert '"6.000" means 6 (six), NOT 6000' in text_prompt
        assert "ALWAYS a decimal point, NEVER a thousands separator" in text_prompt
        assert "Round the value to the nearest integer" in text_prompt

    def test_rules_in_priority_order(self, text_prompt: str) -> None:
        handwritten = text_prompt.index("1. HANDWRITTEN OVERRIDE")
        strikethrough = text_prompt.index("2. STRIKETHROUGH")
        printed = text_prompt.index("3. PRINTED QUANTITY")
        assert handwritten < strikethrough < printed
        assert "OVERRIDES every printed column" in text_prompt

    def test_cleanup_rules(self, text_prompt: str) -> None:
        assert "Strip leading asterisks" in text_prompt
        for suffix in (" - S EMail", " - Box of 4 EMail", " - 12 box min"):
            assert suffix in text_prompt
        assert "5-digit numbers (such as 14001) are SKU codes, NOT quantities" in text_prompt
        assert "greater than 500" in text_prompt

    def test_empty_result_instruction_has_single_braces(self, text_prompt: str) -> None:
        assert 'Return {"items": []} if no items are found' in text_prompt


class TestVisionPrompt:
    def test_json_only_instructions(self, vision_prompt: str) -> None:
        assert "JSON" in vision_prompt
        assert "No markdown" in vision_prompt
        assert "No comments" in vision_prompt
        assert "No extra text" in vision_prompt
        assert "Ignore prices" in vision_prompt

    def test_embeds_output_shape(self, vision_prompt: str) -> None:
        assert '"product": "<string>"' in vision_prompt
        assert "{output_shape}" not in vision_prompt

    def test_describes_column_layout(self, vision_prompt: str) -> None:
        assert "[MARGIN]  [SKU]   [Product Name]" in vision_prompt
        assert "LEFT MARGIN" in vision_prompt

    def test_decimal_quantity_rule(self, vision_prompt: str) -> None:
        assert '"6.000" means 6, NOT 6000' in vision_prompt
        assert "NEVER a thousands separator" in vision_prompt

    def test_worked_examples(self, vision_prompt: str) -> None:
        assert 'handwritten "10", printed "6.000"   -> 10' in vision_prompt
        assert 'no handwriting,   printed "6.000"   -> 6' in vision_prompt
        assert "row crossed out                     -> not in output" in vision_prompt

    def test_example_output_is_valid_json_text(self, vision_prompt: str) -> None:
        assert '{"supplier": "CALENDAR CHEESE", "product": "Fromager d\'Affinois", "quantity": 9}' in vision_prompt
        assert "{{" not in vision_prompt
        assert "}}" not in vision_prompt


class TestPromptBuilderLoading:
    def test_missing_prompt_dir_fails_at_construction(self, tmp_path: Path) -> None:
        with pytest.raises(PromptLoadError):
            PromptBuilder(prompt_dir=tmp_path)
