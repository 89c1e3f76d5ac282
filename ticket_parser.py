"""
Rule-based parser that maps a free-form ticket text block to structured fields.
"""

from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, List, Optional, Tuple, Union

from field_locator import (
    DEFAULT_ISSUE_TYPE,
    DEFAULT_PRIORITY,
    IssueType,
    Line,
    LineKind,
    Priority,
    Section,
    classify_issue_type,
    classify_priority,
    find_environment_token,
    split_lines,
)

logger = logging.getLogger(__name__)

UNTITLED_TICKET = "Untitled Ticket"
MIN_TITLE_LENGTH = 5
MIN_STEP_LENGTH = 2

CRITERIA_SECTIONS = (Section.DEFINITION_OF_DONE, Section.CHECKLIST)
_INNER_WHITESPACE = re.compile(r"[^\S\n]+")


@dataclass(frozen=True)
class TicketRecord:
    title: str
    issue_type: IssueType = DEFAULT_ISSUE_TYPE
    priority: Priority = DEFAULT_PRIORITY
    steps: Tuple[str, ...] = ()
    environment: str = ""
    expected_result: str = ""
    actual_result: str = ""
    definition_of_done: str = ""
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["issue_type"] = self.issue_type.value
        data["priority"] = self.priority.value
        data["steps"] = list(self.steps)
        return data

    def with_issue_type(self, issue_type: Union[IssueType, str]) -> TicketRecord:
        """Return a copy carrying a caller-chosen issue type."""

        return replace(self, issue_type=coerce_issue_type(issue_type))


def coerce_issue_type(value: Union[IssueType, str]) -> IssueType:
    if isinstance(value, IssueType):
        return value
    lowered = str(value).strip().lower()
    for member in IssueType:
        if member.value.lower() == lowered:
            return member
    raise ValueError(f"Unknown issue type: {value!r}")


class TicketParser:
    """Runs every extraction pass over the same original text.

    Each pass records the character ranges it consumed; the residual
    description is whatever no pass claimed.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.lines: List[Line] = split_lines(text)
        self.claimed: List[Tuple[int, int]] = []
        self.title_source = "placeholder"

    def parse(self) -> TicketRecord:
        title = self._resolve_title()
        issue_type = classify_issue_type(self.text)
        priority = classify_priority(self.text)
        steps = self._segment_steps()
        environment = self._extract_environment()
        expected_result = self._extract_labeled(Section.EXPECTED)
        actual_result = self._extract_labeled(Section.ACTUAL)
        self._claim_priority_line()
        definition_of_done = self._extract_block(
            Section.DEFINITION_OF_DONE
        ) or self._extract_block(Section.CHECKLIST)
        self._claim_description_labels()
        description = self._build_description()

        record = TicketRecord(
            title=title,
            issue_type=issue_type,
            priority=priority,
            steps=tuple(steps),
            environment=environment,
            expected_result=expected_result,
            actual_result=actual_result,
            definition_of_done=definition_of_done,
            description=description,
        )
        logger.debug(
            "ticket_parsed",
            extra={
                "title_source": self.title_source,
                "issue_type": issue_type.value,
                "priority": priority.value,
                "step_count": len(steps),
                "claimed_ranges": len(self.claimed),
            },
        )
        return record

    def _claim(self, start: int, end: int) -> None:
        if end > start:
            self.claimed.append((start, end))

    def _claim_line(self, line: Line) -> None:
        self._claim(line.start, line.end)

    def _next_non_blank(self, position: int) -> Optional[Line]:
        for line in self.lines[position + 1 :]:
            if line.kind is not LineKind.BLANK:
                return line
        return None

    def _resolve_title(self) -> str:
        # A bare marker such as "Bug:" never becomes an empty title.
        for line in self.lines:
            if not line.is_label(Section.TITLE):
                continue
            self._claim_line(line)
            if line.rest:
                self.title_source = "marker"
                return line.rest

        for line in self.lines:
            if line.kind in (LineKind.BLANK, LineKind.LABEL):
                continue
            if len(line.text) > MIN_TITLE_LENGTH:
                self._claim_line(line)
                self.title_source = "first_line"
                return line.text

        return UNTITLED_TICKET

    def _segment_steps(self) -> List[str]:
        steps: List[str] = []
        inside = False
        in_criteria = False

        for line in self.lines:
            if line.kind is LineKind.BLANK:
                continue

            if line.kind is LineKind.LABEL:
                in_criteria = line.section in CRITERIA_SECTIONS
                if line.section is Section.STEPS:
                    inside = True
                    self._claim_line(line)
                    if line.rest:
                        steps.append(line.rest)
                    continue
                if line.is_boundary:
                    inside = False
                    continue

            if line.kind is LineKind.NUMBERED:
                if in_criteria:
                    continue
                inside = True
                self._claim_line(line)
                steps.append(line.rest)
                continue

            if inside and len(line.text) > MIN_STEP_LENGTH:
                self._claim_line(line)
                steps.append(line.text)

        return steps

    def _extract_labeled(self, section: Section) -> str:
        for position, line in enumerate(self.lines):
            if not line.is_label(section):
                continue
            if line.rest:
                self._claim_line(line)
                return line.rest
            follower = self._next_non_blank(position)
            if follower is not None and follower.kind is LineKind.PLAIN:
                self._claim(line.start, follower.end)
                return follower.text
            self._claim_line(line)
        return ""

    def _extract_environment(self) -> str:
        labeled = self._extract_labeled(Section.ENVIRONMENT)
        if labeled:
            return labeled
        match = find_environment_token(self.text)
        if match is None:
            return ""
        self._claim(match.start(), match.end())
        return match.group(0)

    def _extract_block(self, section: Section) -> str:
        for position, line in enumerate(self.lines):
            if not line.is_label(section):
                continue
            start: Optional[int] = line.rest_start if line.rest else None
            end = line.rest_end if line.rest else line.end
            for follower in self.lines[position + 1 :]:
                if follower.kind is LineKind.LABEL:
                    break
                if follower.kind is LineKind.BLANK:
                    continue
                if start is None:
                    start = follower.start
                end = follower.end
            self._claim(line.start, end)
            if start is not None:
                return self.text[start:end]
        return ""

    def _claim_priority_line(self) -> None:
        for line in self.lines:
            if line.is_label(Section.PRIORITY):
                self._claim_line(line)
                return

    def _claim_description_labels(self) -> None:
        for line in self.lines:
            if line.is_label(Section.DESCRIPTION):
                self._claim(line.start, line.rest_start)

    def _build_description(self) -> str:
        pieces: List[str] = []
        cursor = 0
        for start, end in _merge_ranges(self.claimed):
            pieces.append(self.text[cursor:start])
            cursor = end
        pieces.append(self.text[cursor:])
        residual = "".join(pieces)
        lines = [_INNER_WHITESPACE.sub(" ", line).strip() for line in residual.splitlines()]
        return "\n".join(line for line in lines if line)


def _merge_ranges(ranges: List[Tuple[int, int]]) -> List[Tuple[int, int]]:
    merged: List[Tuple[int, int]] = []
    for start, end in sorted(ranges):
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged


def parse_ticket(text: str) -> Optional[TicketRecord]:
    """Parse a free-form text block into a ticket record.

    Returns ``None`` when the text is empty or whitespace only; every other
    input yields a fully populated record with defaults applied.
    """

    if not isinstance(text, str):
        raise TypeError(f"Ticket text must be a string, got {type(text).__name__}")
    if not text.strip():
        logger.info("ticket_skipped", extra={"reason": "empty_input"})
        return None
    return TicketParser(text).parse()
