"""
AIP OpenAPI Reviewer CLI
========================
Review an OpenAPI spec file against Google's API Improvement Proposals and
optionally apply the machine-generated fixes.

    python main.py api.yaml
    python main.py api.yaml --strict --format json
    python main.py api.yaml -c naming -c pagination
    python main.py api.yaml -x aip122/plural-resources
    python main.py api.yaml --fix --output api-fixed.yaml
    python main.py api.yaml --fix --dry-run
    python main.py --list-rules

Exit codes:
    0   no errors found (or all fixes applied)
    1   errors found (warnings count in strict mode) or a fix failed
    2   invalid arguments, unreadable or unparseable file
"""
import argparse
import json
import logging
import os
import sys
from typing import Any, Optional

import yaml

from aip_reviewer.core import config
from aip_reviewer.core.constants import CATEGORIES
from aip_reviewer.core.report_formatter import (
    FORMATS,
    format_fix_summary,
    format_review,
    format_rule_list,
)
from aip_reviewer.rules.registry import list_rules
from aip_reviewer.services.fixer import apply_all_fixes
from aip_reviewer.services.reviewer import Reviewer, ReviewerConfig
from aip_reviewer.utils.logging_config import setup_logging

logger = logging.getLogger("main")

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_USAGE = 2


# ---------------------------------------------------------------------------
# Loading / writing
# ---------------------------------------------------------------------------
def _stringify_keys(node: Any) -> Any:
    """YAML turns `200:` into an int key; the document model uses string keys."""
    if isinstance(node, dict):
        return {str(k): _stringify_keys(v) for k, v in node.items()}
    if isinstance(node, list):
        return [_stringify_keys(v) for v in node]
    return node


def load_spec(file_path: str) -> dict:
    """Parse a YAML or JSON spec file. Raises ValueError on unusable content."""
    with open(file_path, "r", encoding="utf-8") as fh:
        text = fh.read()

    try:
        if file_path.lower().endswith(".json"):
            loaded = json.loads(text)
        else:
            loaded = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValueError(f"Failed to parse {file_path}: {e}") from e

    if not isinstance(loaded, dict):
        raise ValueError(f"{file_path} does not contain a JSON/YAML object")
    return _stringify_keys(loaded)


def write_spec(spec: dict, file_path: str) -> None:
    with open(file_path, "w", encoding="utf-8") as fh:
        if file_path.lower().endswith(".json"):
            json.dump(spec, fh, indent=2, ensure_ascii=False)
            fh.write("\n")
        else:
            yaml.safe_dump(spec, fh, sort_keys=False, allow_unicode=True)


def default_output_path(spec_path: str) -> str:
    root, ext = os.path.splitext(spec_path)
    return f"{root}.fixed{ext or '.yaml'}"


# ---------------------------------------------------------------------------
# Arguments
# ---------------------------------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aip-review",
        description="Review OpenAPI specifications against Google's API Improvement Proposals.",
    )
    parser.add_argument("spec", nargs="?", help="Path to OpenAPI spec (YAML or JSON)")
    parser.add_argument("-s", "--strict", action="store_true", default=config.REVIEW_STRICT,
                        help="Treat warnings as errors")
    parser.add_argument("-f", "--format", choices=FORMATS, default="console", help="Output format")
    parser.add_argument("-c", "--category", action="append", choices=CATEGORIES, default=None,
                        help="Only run rules in category (can repeat)")
    parser.add_argument("-x", "--skip", action="append", default=None,
                        help="Skip specific rule by ID (can repeat)")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("-F", "--fix", action="store_true", help="Apply fixes and write the result")
    parser.add_argument("-o", "--output", help="Output path for fixed spec (default: <spec>.fixed.<ext>)")
    parser.add_argument("--dry-run", action="store_true", default=config.FIX_DRY_RUN,
                        help="Show which fixes would be applied without writing")
    parser.add_argument("--log-level", default=config.LOG_LEVEL, help="Logging level (default: INFO)")
    parser.add_argument("--list-rules", action="store_true", help="List the rule catalog and exit")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level, color=not args.no_color)

    if args.list_rules:
        print(format_rule_list(list_rules(category=args.category[0] if args.category else None)))
        return EXIT_OK
    if not args.spec:
        parser.error("the following arguments are required: spec")

    try:
        spec = load_spec(args.spec)
    except FileNotFoundError:
        logger.error("File not found: %s", args.spec)
        return EXIT_USAGE
    except (OSError, ValueError) as e:
        logger.error("%s", e)
        return EXIT_USAGE

    reviewer = Reviewer(ReviewerConfig.from_env(
        strict=args.strict,
        categories=args.category or config.REVIEW_CATEGORIES,
        skip_rules=args.skip or config.REVIEW_SKIP_RULES,
    ))
    result = reviewer.review(spec, args.spec)

    if not args.fix:
        print(format_review(result, args.format, use_colors=not args.no_color))
        return EXIT_FINDINGS if result.has_errors() else EXIT_OK

    outcome = apply_all_fixes(spec, result.fixable(), dry_run=args.dry_run)
    print(format_fix_summary(outcome, dry_run=args.dry_run))
    if not args.dry_run:
        output = args.output or default_output_path(args.spec)
        write_spec(outcome.spec, output)
        logger.info("Fixed spec written to %s", output)
    return EXIT_FINDINGS if outcome.summary.failed else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
