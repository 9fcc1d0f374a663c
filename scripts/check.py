#!/usr/bin/env python3
"""Local CLI entrypoint to run the advisor outside of CI.

Usage:
  python scripts/check.py --root . [--config .npm-advisor.json] [--warn-only]

This calls the same entrypoint as the installed ``npm-advisor`` command.
"""

from __future__ import annotations

from npm_advisor.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
