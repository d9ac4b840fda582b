"""Thin CLI entry point: loads a Manifest and calls the engine."""

import argparse
import json
import logging
import sys
from pathlib import Path

from riprocess.emit import format_pairs
from riprocess.engine import assemble
from riprocess.errors import RiprocessError
from riprocess.manifest import load_manifest


def _run_image_list(args: argparse.Namespace) -> None:
    def on_progress(stage: str, frac: float) -> None:
        logging.getLogger("riprocess").info("[%3.0f%%] %s", frac * 100, stage)

    try:
        manifest = load_manifest(args.config)
        result = assemble(manifest, on_progress=on_progress)
        text = format_pairs(result.pairs)
    except json.JSONDecodeError as e:
        print(f"Error: {args.config} is not valid JSON: {e}", file=sys.stderr)
        sys.exit(1)
    except RiprocessError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.output:
        with open(args.output, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        print(f"Wrote {len(result.pairs)} images to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(text)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="riprocess",
        description="Query and/or generate material for RiPROCESS projects.",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--verbose", "-v", action="store_true", help="Log progress to stderr")
    sub = parser.add_subparsers(dest="command")

    image_list = sub.add_parser("image-list", parents=[common], help="Print a timestamp;path list of camera images")
    image_list.add_argument("config", type=Path, help="Path to a JSON manifest file")
    image_list.add_argument("--output", "-o", type=Path, help="Write the list here instead of stdout")

    serve = sub.add_parser("serve", parents=[common], help="Launch the HTTP API")
    serve.add_argument("--port", type=int, default=8321, help="Port to listen on")
    serve.add_argument("--host", type=str, default="127.0.0.1", help="Host to bind to")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if getattr(args, "verbose", False) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "serve":
        from riprocess.web import create_app
        app = create_app()
        print(f"riprocess API: http://{args.host}:{args.port}", file=sys.stderr)
        app.run(host=args.host, port=args.port, debug=False)
        return

    _run_image_list(args)


def image_list_main() -> None:
    """``image-list CONFIG`` shortcut for ``riprocess image-list CONFIG``."""
    main(["image-list", *sys.argv[1:]])
