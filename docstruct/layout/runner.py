import argparse
import logging
import sys

from ..config import load_config
from .pipeline import DocumentAnalyzer
from .pdf_source import BACKENDS


def main(argv=None):
    parser = argparse.ArgumentParser(description="Infer document structure from a PDF text layer")

    parser.add_argument("pdf_path", help="Path to input PDF file")
    parser.add_argument("--backend", choices=BACKENDS, default="pymupdf", help="Text-layer reader (default: pymupdf)")
    parser.add_argument("--workers", type=int, default=None, help="Pages analyzed in parallel")
    parser.add_argument("--positional", action="store_true", help="Order page content by vertical position")
    parser.add_argument("--indent", type=int, default=2, help="JSON indent (default: 2)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log progress to stderr")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    overrides = {}
    if args.workers is not None:
        overrides["workers"] = max(1, args.workers)
    if args.positional:
        overrides["content_order"] = "positional"
    cfg = load_config(**overrides)

    analyzer = DocumentAnalyzer(cfg)
    try:
        doc = analyzer.analyze_pdf(args.pdf_path, backend=args.backend)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(doc.model_dump_json(by_alias=True, indent=args.indent or None))
    return 0


if __name__ == "__main__":
    sys.exit(main())
