import argparse
import json
import mimetypes
import sys
from collections.abc import Sequence
from pathlib import Path

from restock_parser.config.settings import Settings
from restock_parser.logging.logger import Log
from restock_parser.processor.models import ParseResult, RawDocument
from restock_parser.processor.processor import build_processor


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="restock-parser",
        description="Extract restock items from a stock sales report.",
    )
    parser.add_argument("files", nargs="+", type=Path, help="PDF or image file(s)")
    parser.add_argument(
        "--media-type",
        help="Declared media type; guessed from the file name when omitted",
    )
    parser.add_argument(
        "--images",
        action="store_true",
        help="Treat the files as page images of a single report",
    )
    return parser


def _load_document(path: Path, media_type: str | None) -> RawDocument:
    content = path.read_bytes()
    declared = media_type or mimetypes.guess_type(path.name)[0] or ""
    return RawDocument(
        content=content,
        media_type=declared,
        size_bytes=len(content),
        filename=path.name,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: load settings -> build processor -> parse -> print JSON."""
    args = _build_arg_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level, settings.app_env)

    try:
        documents = [_load_document(path, args.media_type) for path in args.files]
    except OSError as exc:
        Log.error(f"Cannot read input: {exc}")
        return 2

    processor = build_processor(settings)
    result: ParseResult
    if args.images:
        result = processor.parse_images(documents)
    else:
        if len(documents) > 1:
            Log.error("Pass --images to parse several files as one report")
            return 2
        result = processor.parse(documents[0])

    json.dump(result.to_dict(), sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
