from pathlib import Path

from restock_parser.extraction.exceptions import PromptLoadError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"

TEXT_PROMPT_FILE = "text_prompt.txt"
VISION_PROMPT_FILE = "vision_prompt.txt"
OUTPUT_SHAPE_FILE = "output_shape.txt"


def load_prompt_template(name: str, prompt_dir: Path | None = None) -> str:
    """Load a prompt template from the prompt directory.

    Args:
        name: File name of the template, e.g. ``text_prompt.txt``.
        prompt_dir: Directory holding the templates.
                    Defaults to the bundled ``prompts`` directory.

    Returns:
        The raw template string with ``str.format`` placeholders.

    Raises:
        PromptLoadError: if the file cannot be read.
    """
    path = (prompt_dir or _DEFAULT_PROMPT_DIR) / name
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PromptLoadError(f"Failed to load prompt template: {exc}") from exc


def load_output_shape(prompt_dir: Path | None = None) -> str:
    """Load the JSON reply shape embedded in every prompt.

    Raises:
        PromptLoadError: if the file cannot be read.
    """
    path = (prompt_dir or _DEFAULT_PROMPT_DIR) / OUTPUT_SHAPE_FILE
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise PromptLoadError(f"Failed to load output shape: {exc}") from exc
