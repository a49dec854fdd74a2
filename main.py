"""
Entry point and public facade for the H5P → document converter.

Packages:
- h5p2pdf.content: asset lookup and text classification
- h5p2pdf.render: generic tree renderer, positioned slide renderer, page numbers
- h5p2pdf.docs: buffered document model, writer handle, PDF/DOCX/TXT output
"""

from __future__ import annotations

from h5p2pdf.config import RenderSettings, load_settings
from h5p2pdf.content import AssetResolver, is_meaningful, strip_markup
from h5p2pdf.docs import DocumentWriter
from h5p2pdf.docs.package import read_h5p
from h5p2pdf.docs.pipeline import convert_h5p
from h5p2pdf.render import render_content, stamp_page_numbers

__all__ = [
    "RenderSettings",
    "load_settings",
    "AssetResolver",
    "is_meaningful",
    "strip_markup",
    "DocumentWriter",
    "read_h5p",
    "render_content",
    "stamp_page_numbers",
    "convert_h5p",
]


def _cli() -> None:
    """CLI for converting an .h5p package.

    --file / -f: Path to input .h5p package
    --out-format: Output format (pdf|docx|txt), default: pdf
    --out / -o: Output path (default: next to the input, same base name)
    --config: Path to a settings JSON file (default: config/settings.json)
    --debug-buffer: Keep the extraction directory (default: False)
    """
    import argparse

    parser = argparse.ArgumentParser(description="Convert an H5P package into a paginated document.")
    parser.add_argument("--file", "-f", type=str, help="Path to input .h5p package")
    parser.add_argument("--out-format", type=str, default="pdf", choices=["pdf", "docx", "txt"], help="Output format (default: pdf)")
    parser.add_argument("--out", "-o", type=str, default=None, help="Output path (default: <input name>.<format> next to the input)")
    parser.add_argument("--config", type=str, default=None, help="Path to settings JSON (default: config/settings.json)")
    parser.add_argument("--debug-buffer", action="store_true", help="Keep the extraction directory for inspection")

    args = parser.parse_args()

    if not args.file:
        print("Please provide --file path to an .h5p package.")
        print("Example:\n  python main.py --file lesson.h5p --out-format pdf")
        raise SystemExit(2)

    settings = load_settings(args.config)
    result = convert_h5p(
        file_path=args.file,
        out_format=args.out_format,
        out_path=args.out,
        debug_buffer=bool(args.debug_buffer),
        settings=settings,
    )
    # Print produced paths
    for k, v in result.items():
        print(f"{k}: {v}")


if __name__ == "__main__":
    _cli()
