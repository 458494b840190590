"""Command-line interface for statelex."""

from __future__ import annotations

import argparse
import io
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from statelex.errors import LexicalError
from statelex.grammars import available, get_grammar


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    grammar: str
    strict: bool
    preview: int
    watch: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="statelex",
        description="Tokenize a source file with a state-stack lexer grammar",
    )
    p.add_argument("input", help="Input source file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-g",
        "--grammar",
        default=None,
        help=f"Grammar to lex with (default: asm; available: {', '.join(available())})",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover statelex.toml)",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail if input ends inside a nested state (e.g. an open string)",
    )
    p.add_argument(
        "--preview",
        type=int,
        default=None,
        metavar="N",
        help="Characters of unmatched input shown in errors (default: 20)",
    )
    p.add_argument("--watch", action="store_true", help="Watch for changes and re-lex")
    p.add_argument("--debug", action="store_true", help="Trace state transitions to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "statelex.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    try:
        config = load_config(config_path, input_dir)
    except tomllib.TOMLDecodeError as exc:
        raise argparse.ArgumentTypeError(f"invalid config file: {exc}") from exc

    scan_cfg = config.get("scan")
    if scan_cfg is None:
        scan_cfg = {}
    elif not isinstance(scan_cfg, dict):
        raise argparse.ArgumentTypeError("config [scan] must be a table")

    grammar = "asm"
    cfg_grammar = scan_cfg.get("grammar")
    if cfg_grammar is not None:
        if not isinstance(cfg_grammar, str):
            raise argparse.ArgumentTypeError("config scan.grammar must be a string")
        grammar = cfg_grammar
    if args.grammar is not None:
        grammar = args.grammar
    if grammar not in available():
        raise argparse.ArgumentTypeError(
            f"unknown grammar '{grammar}' (available: {', '.join(available())})"
        )

    strict = False
    cfg_strict = scan_cfg.get("strict")
    if cfg_strict is not None:
        if not isinstance(cfg_strict, bool):
            raise argparse.ArgumentTypeError("config scan.strict must be true or false")
        strict = cfg_strict
    if args.strict is not None:
        strict = args.strict

    preview = 20
    cfg_preview = scan_cfg.get("preview")
    if cfg_preview is not None:
        # bool is an int subclass
        if not isinstance(cfg_preview, int) or isinstance(cfg_preview, bool):
            raise argparse.ArgumentTypeError("config scan.preview must be an integer")
        preview = cfg_preview
    if args.preview is not None:
        preview = args.preview
    if preview < 1:
        raise argparse.ArgumentTypeError(f"preview must be at least 1, got {preview}")

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        grammar=grammar,
        strict=strict,
        preview=preview,
        watch=args.watch,
        debug=args.debug,
    )


def lex_file(options: CliOptions) -> str:
    """Read and tokenize a file, returning one token description per line."""
    from statelex.debug import TraceWriter, dump_tokens
    from statelex.scanner import Scanner

    grammar = get_grammar(options.grammar)
    source = options.input_file.read_text(encoding="utf-8")
    scanner = Scanner(
        source,
        initial_state=grammar.initial_state,
        rules=grammar.rules,
        strict=options.strict,
        preview=options.preview,
        trace=TraceWriter(source) if options.debug else None,
    )
    tokens = scanner.run()
    out = io.StringIO()
    dump_tokens(tokens, grammar.describe, file=out)
    return out.getvalue()


def _write(options: CliOptions, output: str) -> None:
    if options.output_file:
        options.output_file.write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)
        sys.stdout.flush()


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, re-lex on each modification."""
    last_mtime = 0.0
    print(f"Watching {options.input_file} for changes...", file=sys.stderr)
    try:
        while True:
            try:
                mtime = options.input_file.stat().st_mtime
            except OSError:
                time.sleep(0.5)
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                try:
                    _write(options, lex_file(options))
                    print(f"Lexed {options.input_file}", file=sys.stderr)
                except LexicalError as exc:
                    print(exc.format(str(options.input_file)), file=sys.stderr)
                except (OSError, UnicodeDecodeError) as exc:
                    print(f"error: {exc}", file=sys.stderr)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.watch:
        watch_loop(options)
        return 0

    try:
        output = lex_file(options)
        _write(options, output)
    except LexicalError as exc:
        print(exc.format(str(options.input_file)), file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    return 0
