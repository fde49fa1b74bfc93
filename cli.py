#!/usr/bin/env python3
import argparse
import sys

from gallery.errors import GalleryError
from gallery.orchestrator import run_once
from gallery.presentation import empty_message
from gallery.rendering.markdown import render_md


def main(argv=None):
    parser = argparse.ArgumentParser(description="Listing Gallery CLI")
    parser.add_argument("listing", help="Listing URL or street address (e.g. '123 Main St, NYC')")
    parser.add_argument("--config", help="Path to YAML config")
    parser.add_argument("--model", help="Gemini model name")
    parser.add_argument("--retries", type=int, help="Extra attempts for transient provider errors")
    parser.add_argument("--out-dir", dest="out_dir", help="Directory for rendered output files")
    parser.add_argument("--format", dest="formats", action="append", choices=["md", "json", "html"],
                        help="Output format (repeatable)")
    parser.add_argument("--download", dest="download", action="store_true", help="Download every gallery image")
    parser.add_argument("--no-download", dest="download", action="store_false", help="Skip image download even if configured")
    parser.add_argument("--open", dest="open_browser", action="store_true", help="Open every image in a browser tab")
    parser.set_defaults(download=None)
    args = parser.parse_args(argv)

    overrides = {
        "model": args.model,
        "retries": args.retries,
        "out_dir": args.out_dir,
        "formats": args.formats,
        "download": args.download,
    }
    if args.out_dir and not args.formats:
        overrides["formats"] = ["md", "json"]

    try:
        result = run_once(args.listing, args.config, overrides=overrides, open_browser=args.open_browser)
    except (GalleryError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if result.is_empty:
        print(empty_message(args.listing), file=sys.stderr)
        return 2

    print(render_md(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
