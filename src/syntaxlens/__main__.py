"""CLI entry point: run `syntaxlens file.swift` or `python -m syntaxlens < file.swift`."""

import json
import logging
import sys
from pathlib import Path
from typing import List, Optional


def _write_error(message: str) -> None:
    """Single-line JSON error envelope on stdout"""
    sys.stdout.write(json.dumps({"error": message}, ensure_ascii=False) + "\n")


def _input_error(message: str) -> int:
    _write_error(message)
    sys.stderr.write(f"syntaxlens: error: {message}\n")
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    import argparse
    from .engine.driver import RenderDriver, RenderOptions
    from .shared.errors import ErrorReporter, ParseError, _use_color
    from .tree.serialization import encode_tree, serialize_cst
    from .utils.io_utils import read_source_file, read_source_stream

    parser = argparse.ArgumentParser(
        prog="syntaxlens",
        description="Render Swift source as a flat, annotated syntax tree (JSON).",
    )
    parser.add_argument("file", type=Path, nargs="?", help="Path to source file (default: read stdin)")
    parser.add_argument("--no-fold", action="store_true", help="Keep operator sequences flat")
    parser.add_argument("--show-missing", action="store_true",
                        help="Label tokens inserted by error recovery with their text")
    parser.add_argument("--format", choices=("json", "sexpr"), default="json",
                        help="Output node list as JSON (default) or the CST as an S-expression")
    parser.add_argument("--indent", type=int, default=None, help="Pretty-print JSON with this indent")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    source_file = "<stdin>"
    try:
        if args.file is None:
            source = read_source_stream()
        else:
            path = args.file.resolve()
            if not path.is_file():
                return _input_error(f"file not found: {path}")
            source_file = str(path)
            source = read_source_file(path)
    except UnicodeDecodeError as e:
        return _input_error(f"input is not valid UTF-8: {e}")
    except OSError as e:
        return _input_error(f"could not read input: {e}")

    options = RenderOptions(fold=not args.no_fold, show_missing_tokens=args.show_missing)
    driver = RenderDriver()
    try:
        if args.format == "sexpr":
            output = serialize_cst(driver.syntax_tree(source, options, source_file).root)
        else:
            output = encode_tree(driver.build_nodes(source, options, source_file), indent=args.indent)
    except ParseError as e:
        reporter = ErrorReporter({source_file: source})
        reporter.report(e)
        _write_error(str(e))
        sys.stderr.write(reporter.format_all_errors(color=_use_color()) + "\n")
        return 1

    sys.stdout.write(output + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
