"""Command line interface for datamodgen."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .api import WriteOptions, plan_dry_run, write_mod
from .config import REPORTERS, load_config
from .errors import ModError
from .loader import load_mod
from .logging import configure_logging, section, step
from .reporting import (
    set_reporter,
    get_reporter,
    PlainReporter,
    JsonLinesReporter,
    SilentReporter,
    RichReporter,
    set_verbosity,
)


def _write_cmd(args: argparse.Namespace) -> int:
    step(f"loading {args.target}")
    mod = load_mod(args.target)
    with section(f"Write {mod.id}"):
        write_mod(
            WriteOptions(
                mod=mod,
                output_root=args.output,
                keep_old_folder=args.keep_old,
                minify_json=args.minify,
            )
        )
    return 0


def _plan_cmd(args: argparse.Namespace) -> int:
    mod = load_mod(args.target)
    result, plan_dict = plan_dry_run(mod)
    # Ensure any active progress UI is finalized before emitting output
    rep = get_reporter()
    rep.flush()
    if args.json:
        print(json.dumps(plan_dict, indent=2, sort_keys=True))
    else:
        for path in result.files:
            print(path)
    return 0


def _build_cmd(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    # Project file settings apply only where the command line left defaults.
    if config.reporter and args.reporter is None:
        _select_reporter(config.reporter)
    if config.verbose and not args.verbose:
        set_verbosity(config.verbose)
        configure_logging(config.verbose)
    step(f"loading {config.mod}")
    mod = load_mod(config.mod)
    with section(f"Write {mod.id}"):
        write_mod(
            WriteOptions(
                mod=mod,
                output_root=config.output,
                keep_old_folder=config.keep_old_folder,
                minify_json=config.minify_json,
            )
        )
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="datamodgen", description="Write a data-mod folder from Python"
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (repeatable)",
    )
    p.add_argument(
        "-r",
        "--reporter",
        choices=list(REPORTERS),
        default=None,
        help="Select reporter backend: plain (default), rich, json (JSONL events), silent",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    w = sub.add_parser("write", help="Write a mod to an output folder")
    w.add_argument("target", help="module[:attr] or script.py[:attr]")
    w.add_argument("output", type=Path, help="Folder that receives <mod id>/")
    w.add_argument(
        "--keep-old",
        dest="keep_old",
        action="store_true",
        help="Do not clear the previous mod folder first",
    )
    w.add_argument(
        "--minify", action="store_true", help="Write compact JSON"
    )
    w.set_defaults(func=_write_cmd)

    pl = sub.add_parser("plan", help="List the files a write would produce")
    pl.add_argument("target", help="module[:attr] or script.py[:attr]")
    pl.add_argument("--json", action="store_true", help="Emit JSON plan")
    pl.set_defaults(func=_plan_cmd)

    b = sub.add_parser("build", help="Write a mod described by a project file")
    b.add_argument("config", type=Path)
    b.set_defaults(func=_build_cmd)

    return p


def _select_reporter(requested: str | None) -> None:
    if requested == "json":
        set_reporter(JsonLinesReporter())
    elif requested == "silent":
        set_reporter(SilentReporter())
    elif requested == "rich":
        if sys.stderr.isatty():
            set_reporter(RichReporter())
        else:
            # Fallback quietly to plain if no TTY
            set_reporter(PlainReporter())
    else:  # plain
        set_reporter(PlainReporter())


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    _select_reporter(args.reporter)
    # Apply verbosity globally for reporters (verbose gating)
    set_verbosity(args.verbose)
    configure_logging(args.verbose)
    try:
        return args.func(args)
    except ModError as e:
        rep = get_reporter()
        rep.error(str(e), code=e.code, context=e.context or {})
        if e.__cause__ is not None:
            rep.error(f"  caused by: {e.__cause__!r}")
        rep.flush()
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
