"""Command line entrypoint for checking package.json dependencies."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path

from .config import ConfigError, load_settings
from .core import check_repository
from .summary import render_summary

EXIT_FINDINGS = 10
EXIT_CONFIG_ERROR = 2
WARN_ONLY_ENV_VAR = "NPM_ADVISOR_WARN_ONLY"


def _truthy(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "y"}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--root", type=Path, default=Path("."), help="Repository root to scan")
    parser.add_argument("--config", type=Path, default=None, help="Path to a settings JSON file")
    parser.add_argument("--registry", default=None, help="npm registry URL override")
    parser.add_argument(
        "--summary",
        type=Path,
        default=None,
        help="Write a Markdown summary to this file (defaults to $GITHUB_STEP_SUMMARY)",
    )
    parser.add_argument("--warn-only", action="store_true", help="Exit 0 even with findings")
    parser.add_argument("--verbose", action="store_true", help="Log progress to stderr")
    return parser.parse_args(argv)


def _write_summary(report: dict, target: Path | None) -> None:
    if target is None:
        step_summary = os.getenv("GITHUB_STEP_SUMMARY", "")
        if not step_summary:
            return
        with open(step_summary, "a", encoding="utf-8") as fh:
            fh.write(render_summary(report))
        return
    target.write_text(render_summary(report), encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    root = args.root.resolve()
    try:
        settings = load_settings(args.config, root=root)
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    if args.registry:
        settings = replace(settings, registry=args.registry)

    report = check_repository(root, settings)
    print(json.dumps(report, indent=2))
    _write_summary(report, args.summary)

    # Default behavior: fail on findings unless env override set or --warn-only
    if report.get("hasFindings") and not args.warn_only:
        if _truthy(os.getenv(WARN_ONLY_ENV_VAR, "")):
            return 0
        return EXIT_FINDINGS

    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
