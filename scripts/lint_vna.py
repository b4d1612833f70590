#!/usr/bin/env python3
"""Lint .vna files: parse, validate and print every issue.

Usage:
    python scripts/lint_vna.py compositions/*.vna
    python scripts/lint_vna.py --info ninnukori.vna

Exit status is 1 if any file fails to parse or has error-severity issues.
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from vna_engine.logging_utils import configure_logging, log_event
from vna_engine.notation.errors import ParseError
from vna_engine.notation.parser import parse
from vna_engine.summary import render_summary, summarize
from vna_engine.validation.issues import has_errors
from vna_engine.validation.validator import validate

logger = logging.getLogger("lint_vna")


def lint_file(path: Path, show_info: bool = False) -> bool:
    """Lint one file. Returns True if it has errors."""
    print(f"{path}")
    try:
        document = parse(path.read_text(encoding="utf-8"))
    except ParseError as exc:
        print(f"  ERROR line {exc.line}: {exc.message} [{exc.kind.code}]")
        return True

    if show_info:
        for line in render_summary(summarize(document)).splitlines():
            print(f"  {line}")

    issues = validate(document)
    if not issues:
        print("  No issues found")
    for issue in issues:
        code = f" [{issue.code}]" if issue.code else ""
        print(f"  {issue.severity.value.upper()} line {issue.line}: {issue.message}{code}")

    log_event(logger, "file_linted", logging.DEBUG, path=str(path), issues=len(issues))
    return has_errors(issues)


def main() -> None:
    parser = argparse.ArgumentParser(description="Lint .vna notation files")
    parser.add_argument("files", nargs="+", type=Path, help=".vna files to lint")
    parser.add_argument("--info", action="store_true", help="Also print a structure summary")
    args = parser.parse_args()

    configure_logging()

    failed = False
    for path in args.files:
        if not path.exists():
            print(f"{path}: file not found")
            failed = True
            continue
        if lint_file(path, show_info=args.info):
            failed = True
        print()

    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
