"""
Shared vocabulary for ticket extraction: keyword tables, section labels and
per-line classification.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Match, Optional, Pattern, Tuple


class IssueType(str, Enum):
    BUG = "Bug"
    STORY = "Story"
    TASK = "Task"


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Section(str, Enum):
    TITLE = "title"
    STEPS = "steps"
    ENVIRONMENT = "environment"
    EXPECTED = "expected"
    ACTUAL = "actual"
    PRIORITY = "priority"
    DESCRIPTION = "description"
    DEFINITION_OF_DONE = "definition_of_done"
    CHECKLIST = "checklist"


class LineKind(str, Enum):
    BLANK = "blank"
    LABEL = "label"
    NUMBERED = "numbered"
    PLAIN = "plain"


DEFAULT_ISSUE_TYPE = IssueType.BUG
DEFAULT_PRIORITY = Priority.MEDIUM


def _words(*words: str) -> Pattern[str]:
    return re.compile(r"\b(?:" + "|".join(words) + r")\b", re.IGNORECASE)


# Table order is the tie-break: the first entry whose pattern occurs anywhere wins.
ISSUE_TYPE_TABLE: Tuple[Tuple[Pattern[str], IssueType], ...] = (
    (
        _words(
            "bugs?",
            "defect",
            "crash(?:es|ed)?",
            "issue",
            "problem",
            "errors?",
            "fail(?:s|ed|ure)?",
            "broken",
        ),
        IssueType.BUG,
    ),
    (_words("feature", "story", "enhancement", "improvement"), IssueType.STORY),
    (_words("task", "todo", "to-do", "chore", "work", "implement"), IssueType.TASK),
)

PRIORITY_TABLE: Tuple[Tuple[Pattern[str], Priority], ...] = (
    (_words("critical", "urgent", "blocker", "high", "highest"), Priority.HIGH),
    (_words("low", "lowest", "minor", "trivial"), Priority.LOW),
)

# Longer aliases come first so "expected result:" is not read as "expected".
SECTION_LABELS: Tuple[Tuple[Section, Tuple[str, ...]], ...] = (
    (Section.TITLE, ("title", "summary", "bug", "feature", "task", "story")),
    (Section.STEPS, ("steps to reproduce", "how to reproduce", "reproduce", "steps")),
    (
        Section.ENVIRONMENT,
        ("environment", "env", "device", "browser", "platform", "os", "system"),
    ),
    (Section.EXPECTED, ("expected result", "expected", "should")),
    (Section.ACTUAL, ("actual result", "actual", "what happens")),
    (Section.PRIORITY, ("priority",)),
    (Section.DESCRIPTION, ("description", "notes", "note")),
    (Section.DEFINITION_OF_DONE, ("definition of done", "dod", "acceptance criteria")),
    (Section.CHECKLIST, ("checklist", "requirements", "criteria")),
)

BOUNDARY_SECTIONS = frozenset(
    {
        Section.ENVIRONMENT,
        Section.EXPECTED,
        Section.ACTUAL,
        Section.PRIORITY,
        Section.DESCRIPTION,
        Section.DEFINITION_OF_DONE,
        Section.CHECKLIST,
    }
)

# A label may follow a bullet marker ("- Expected: ...") but never sits mid-sentence.
LABEL_PATTERN = re.compile(
    r"^(?:[-*•]\s*)?(?P<label>"
    + "|".join(alias for _, aliases in SECTION_LABELS for alias in aliases)
    + r"):(?P<rest>.*)$",
    re.IGNORECASE,
)
NUMBERED_PATTERN = re.compile(r"^(?P<number>\d+)\.\s*(?P<rest>\S.*)$")
ENVIRONMENT_TOKEN_PATTERN = re.compile(
    r"\b(?:iphone|ipad|android|ios|windows|macos|mac|linux|chrome|safari|firefox)\b"
    r"(?:[ \t]+v?\d+(?:\.\d+)*)*",
    re.IGNORECASE,
)

_ALIAS_TO_SECTION = {
    alias: section for section, aliases in SECTION_LABELS for alias in aliases
}


@dataclass(frozen=True)
class Line:
    """One input line, classified once and shared by every extraction pass.

    ``start``/``end`` delimit the stripped line content in the original text;
    ``rest`` is the text after a label colon or list number, starting at
    ``rest_start``.
    """

    index: int
    start: int
    end: int
    text: str
    kind: LineKind
    section: Optional[Section] = None
    number: Optional[int] = None
    rest: str = ""
    rest_start: int = 0

    @property
    def rest_end(self) -> int:
        return self.rest_start + len(self.rest)

    def is_label(self, *sections: Section) -> bool:
        return self.kind is LineKind.LABEL and (not sections or self.section in sections)

    @property
    def is_boundary(self) -> bool:
        return self.kind is LineKind.LABEL and self.section in BOUNDARY_SECTIONS


def classify_line(raw: str, *, index: int = 0, offset: int = 0) -> Line:
    """Classify one raw line whose first character sits at ``offset``."""

    text = raw.strip()
    start = offset + len(raw) - len(raw.lstrip())
    end = start + len(text)
    if not text:
        return Line(index=index, start=start, end=start, text="", kind=LineKind.BLANK)

    match = LABEL_PATTERN.match(text)
    if match:
        rest, rest_start = _stripped_group(match, "rest", start)
        return Line(
            index=index,
            start=start,
            end=end,
            text=text,
            kind=LineKind.LABEL,
            section=_ALIAS_TO_SECTION[match.group("label").lower()],
            rest=rest,
            rest_start=rest_start if rest else end,
        )

    match = NUMBERED_PATTERN.match(text)
    if match:
        rest, rest_start = _stripped_group(match, "rest", start)
        return Line(
            index=index,
            start=start,
            end=end,
            text=text,
            kind=LineKind.NUMBERED,
            number=int(match.group("number")),
            rest=rest,
            rest_start=rest_start,
        )

    return Line(
        index=index,
        start=start,
        end=end,
        text=text,
        kind=LineKind.PLAIN,
        rest=text,
        rest_start=start,
    )


def _stripped_group(match: Match[str], group: str, offset: int) -> Tuple[str, int]:
    """Strip a group (any Unicode whitespace) and return where the kept text starts."""

    raw = match.group(group)
    lead = len(raw) - len(raw.lstrip())
    return raw.strip(), offset + match.start(group) + lead


def split_lines(text: str) -> List[Line]:
    lines: List[Line] = []
    offset = 0
    for index, raw in enumerate(text.split("\n")):
        lines.append(classify_line(raw, index=index, offset=offset))
        offset += len(raw) + 1
    return lines


def is_section_boundary(line: str) -> bool:
    """Return True when ``line`` starts a field that ends any open block."""

    return classify_line(line).is_boundary


def classify_issue_type(text: str) -> IssueType:
    for pattern, issue_type in ISSUE_TYPE_TABLE:
        if pattern.search(text):
            return issue_type
    return DEFAULT_ISSUE_TYPE


def classify_priority(text: str) -> Priority:
    for pattern, priority in PRIORITY_TABLE:
        if pattern.search(text):
            return priority
    return DEFAULT_PRIORITY


def find_environment_token(text: str) -> Optional[Match[str]]:
    """Return the first device/browser/OS token, with any version numbers."""

    return ENVIRONMENT_TOKEN_PATTERN.search(text)
