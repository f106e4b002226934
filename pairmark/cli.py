"""Command-line interface for pairmark.

WHY: Users need a simple way to run the passes over a token file from
the terminal. The CLI wires together loading, schema validation, the
document pipeline, the selected formatters and file saving behind a
single command.

HOW: Uses argparse to accept an input token JSON file, the pair rules
to apply, the section heading level, output formats and an output
directory. Status messages go to stderr; output files are saved next to
the input (or to --output-dir).

RULES:
- Positional argument: input token JSON file ("-" reads stdin)
- --rules: comma-separated rule names (default from PAIRMARK_RULES)
- --section-level: 1-6, or 0 to disable (default from PAIRMARK_SECTION_LEVEL)
- Flags override the environment; a bad environment value only fails
  when the matching flag is absent
- --formats: comma-separated formatter keys (default: all registered)
- --stdout: print the first selected format to stdout instead of saving
- Output naming: {stem}{suffix}, numeric suffix for conflicts (-tokens-2.json)
- Exit codes: 0 = success, 1 = invalid input or structural fault
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import jsonschema

from pairmark.config import (
    get_default_rules,
    get_log_level,
    get_section_level,
    parse_section_level,
)
from pairmark.core.errors import StructuralFault
from pairmark.core.loader import load_tokens, loads_tokens
from pairmark.core.pipeline import process_document
from pairmark.formatters import FORMATTERS
from pairmark.formatters.base import FormatterOutput
from pairmark.rules import RULES, resolve_rules

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr (stdout stays pipeable)."""
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _resolve_output_path(stem: str, suffix: str, output_dir: Path) -> Path:
    """Resolve the output file path, adding numeric suffix on conflict.

    RULES:
    - First attempt: {stem}{suffix} (e.g. notes-tokens.json)
    - Conflict: insert counter before the extension (notes-tokens-2.json)
    - Counter starts at 2 and increments
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    dot_idx = suffix.rfind(".")
    if dot_idx > 0:
        suffix_name = suffix[:dot_idx]
        suffix_ext = suffix[dot_idx:]
    else:
        suffix_name = suffix
        suffix_ext = ""

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(output: FormatterOutput, stem: str, output_dir: Path) -> Path:
    path = _resolve_output_path(stem, output.suffix, output_dir)
    path.write_text(output.content, encoding="utf-8")
    return path


def _parse_format_keys(value: Optional[str]) -> List[str]:
    if not value:
        return list(FORMATTERS.keys())
    keys = [f.strip() for f in value.split(",") if f.strip()]
    for key in keys:
        if key not in FORMATTERS:
            raise ValueError(
                "Unknown format '{}'. Available formats: {}".format(
                    key, ", ".join(sorted(FORMATTERS.keys()))
                )
            )
    return keys


def run(args: argparse.Namespace) -> int:
    """Execute the pipeline for parsed arguments.

    Returns:
        Number of output files written (0 with --stdout).
    """
    try:
        rules = resolve_rules(args.rules.split(",") if args.rules else get_default_rules())
        if args.section_level is None:
            section_level = get_section_level()
        else:
            section_level = parse_section_level(str(args.section_level))
        format_keys = _parse_format_keys(args.formats)
    except ValueError as exc:
        _fail(str(exc))

    input_path: Optional[Path] = None
    if args.input_file == "-":
        stem = "stdin"
        default_dir = Path.cwd()
    else:
        input_path = Path(args.input_file).resolve()
        if not input_path.is_file():
            _fail("File not found: {}".format(input_path))
        stem = input_path.stem
        default_dir = input_path.parent

    output_dir = Path(args.output_dir).resolve() if args.output_dir else default_dir
    if not args.stdout and not output_dir.is_dir():
        _fail("Output directory does not exist: {}".format(output_dir))

    try:
        if input_path is None:
            tokens = loads_tokens(sys.stdin.read())
        else:
            tokens = load_tokens(input_path)
    except jsonschema.ValidationError as exc:
        _fail("Input is not a valid token stream: {}".format(exc.message))
    except (OSError, ValueError) as exc:
        _fail(str(exc))

    _status("Loaded {} token(s); rules: {}; section level: {}".format(
        len(tokens),
        ", ".join(rule.name for rule in rules) or "none",
        section_level or "off",
    ))

    try:
        finished = process_document(tokens, rules=rules, section_level=section_level)
    except StructuralFault as exc:
        logger.debug("Structural fault", exc_info=True)
        _fail("Structural fault: {}".format(exc))

    if args.stdout:
        formatter = FORMATTERS[format_keys[0]]()
        sys.stdout.write(formatter.format(finished).content)
        return 0

    saved_files: List[Path] = []
    for key in format_keys:
        formatter = FORMATTERS[key]()
        output = formatter.format(finished)
        saved_path = _save_output(output, stem, output_dir)
        saved_files.append(saved_path)
        _status("  Saved {}: {}".format(formatter.name, saved_path.name))

    _status("Done! Saved {} file(s) to {}".format(len(saved_files), output_dir))
    return len(saved_files)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="pairmark",
        description="Resolve inline pair markers and insert heading sections "
                    "in a JSON token stream.",
    )

    parser.add_argument(
        "input_file",
        help="Path to the token JSON file, or '-' to read stdin.",
    )

    parser.add_argument(
        "--rules",
        default=None,
        help="Comma-separated pair rules. Available: {}. "
             "Default: PAIRMARK_RULES, or all.".format(", ".join(sorted(RULES.keys()))),
    )

    parser.add_argument(
        "--section-level",
        type=int,
        default=None,
        help="Heading level that starts a section, 0 to disable "
             "(default: PAIRMARK_SECTION_LEVEL, or 2).",
    )

    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: all.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: same as input file).",
    )

    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Write the first selected format to stdout instead of saving files.",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging on stderr.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``pairmark`` and ``python -m pairmark``.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        log_level = logging.DEBUG if args.verbose else get_log_level()
    except ValueError as exc:
        _fail(str(exc))
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    run(args)


if __name__ == "__main__":
    main()
