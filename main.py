"""quickticket command line entry point."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import config
from batch import parse_tickets
from jira_fields import build_fields
from logging_utils import configure_logging
from samples import SAMPLE_TEXTS

logger = logging.getLogger(__name__)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract structured ticket fields from free-form text"
    )
    parser.add_argument("files", nargs="*", help="Text files, one ticket per file")
    parser.add_argument("--sample", choices=sorted(SAMPLE_TEXTS), help="Parse a built-in sample")
    parser.add_argument(
        "--issue-type", help="Override the detected issue type for every ticket"
    )
    parser.add_argument(
        "--jira", action="store_true", help="Print Jira issue fields instead of raw records"
    )
    parser.add_argument("--project-key", help="Jira project key for --jira output")
    return parser


def _read_inputs(args: argparse.Namespace) -> List[str]:
    if args.sample:
        return [SAMPLE_TEXTS[args.sample]]
    if args.files:
        return [Path(path).read_text(encoding="utf-8") for path in args.files]
    return [sys.stdin.read()]


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    configure_logging(config.LOG_LEVEL, config.LOG_JSON)

    try:
        texts = _read_inputs(args)
    except OSError as exc:
        logger.error("input_read_failed", extra={"error": str(exc)})
        print(f"Could not read input: {exc}", file=sys.stderr)
        return 1

    overrides = {index: args.issue_type for index in range(len(texts))} if args.issue_type else None
    try:
        records = parse_tickets(texts, issue_type_overrides=overrides)
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    output = []
    for record in records:
        if record is None:
            continue
        if args.jira:
            output.append(build_fields(record, project_key=args.project_key))
        else:
            output.append(record.to_dict())

    if not output:
        print("No ticket information found in the input.", file=sys.stderr)
        return 1

    print(json.dumps(output if len(output) > 1 else output[0], indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
