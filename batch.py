"""Parse many independent ticket texts, keeping results aligned with the input."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Mapping, Optional, Sequence, Union

import config
from field_locator import IssueType
from ticket_parser import TicketRecord, coerce_issue_type, parse_ticket

logger = logging.getLogger(__name__)


def parse_tickets(
    texts: Sequence[str],
    *,
    issue_type_overrides: Optional[Mapping[int, Union[IssueType, str]]] = None,
    max_workers: Optional[int] = None,
) -> list[Optional[TicketRecord]]:
    """Parse each text on a worker pool.

    The result has one entry per input, ``None`` where the text was blank.
    ``issue_type_overrides`` maps an input index to the issue type the caller
    picked for it; overrides are validated before any parsing starts.
    """

    overrides = {
        index: coerce_issue_type(value) for index, value in (issue_type_overrides or {}).items()
    }
    workers = config.BATCH_MAX_WORKERS if max_workers is None else max_workers
    if workers < 1:
        raise ValueError("max_workers must be at least 1")

    with ThreadPoolExecutor(max_workers=workers) as executor:
        records = list(executor.map(parse_ticket, texts))

    results: list[Optional[TicketRecord]] = []
    for index, record in enumerate(records):
        if record is not None and index in overrides:
            record = record.with_issue_type(overrides[index])
        results.append(record)

    logger.info(
        "batch_parsed",
        extra={
            "inputs": len(results),
            "tickets": sum(1 for record in results if record is not None),
            "overrides": len(overrides),
            "workers": workers,
        },
    )
    return results
