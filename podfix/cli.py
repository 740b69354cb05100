"""Command line entry point: apply named fixes to a CocoaPods project.

Run from the directory holding ``Pods/`` with no arguments to apply the
default fix to ``Pods/Pods.xcodeproj``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from podfix.errors import PodfixError
from podfix.fixes import DEFAULT_FIX, FIXES, apply_fix

DEFAULT_PROJECT = Path("Pods") / "Pods.xcodeproj"

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="podfix", description="Force build settings on targets of an Xcode project.")
    parser.add_argument(
        "--project",
        type=Path,
        default=DEFAULT_PROJECT,
        help=f"path to the .xcodeproj bundle or project.pbxproj file (default: {DEFAULT_PROJECT})",
    )
    parser.add_argument(
        "--fix",
        dest="fixes",
        action="append",
        choices=list(FIXES),
        help=f"fix to apply, may be repeated (default: {DEFAULT_FIX})",
    )
    parser.add_argument("--list", action="store_true", help="list known fixes and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every changed setting")
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.captureWarnings(True)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    if args.list:
        for fix in FIXES.values():
            print(f"{fix.name}: {fix.description} [{fix.target}]")
            for key, value in fix.overrides.items():
                if not isinstance(value, str):
                    value = " ".join(value)
                print(f"    {key} = {value}")
        return 0

    for name in args.fixes or [DEFAULT_FIX]:
        fix = FIXES[name]
        try:
            report = apply_fix(args.project, fix)
        except PodfixError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1

        if not report.matched_targets:
            print(f"No target named {fix.target} in {report.path}")
            continue
        for index in range(1, report.matched_targets + 1):
            print(f"Found {fix.target} target, fixing build settings...")
            for entry in report.patched:
                if entry.target_index == index:
                    print(f"Fixed {entry.configuration} configuration")
        if not report.changed:
            logger.info("%s: settings were already in place", fix.name)

    print("Done!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
