# jira_fields.py
"""Build Jira issue field payloads from parsed ticket records."""

from __future__ import annotations

import re
from typing import Any, Optional

import config
from ticket_parser import TicketRecord


def format_description(record: TicketRecord) -> str:
    """Compose the plain-text issue description from every populated field."""

    sections: list[str] = []
    if record.description:
        sections.append(record.description)
    if record.steps:
        numbered = "\n".join(f"{index}. {step}" for index, step in enumerate(record.steps, 1))
        sections.append(f"Steps to Reproduce:\n{numbered}")
    if record.environment:
        sections.append(f"Environment: {record.environment}")
    if record.expected_result:
        sections.append(f"Expected Result: {record.expected_result}")
    if record.actual_result:
        sections.append(f"Actual Result: {record.actual_result}")
    if record.definition_of_done:
        sections.append(f"Definition of Done:\n{record.definition_of_done}")
    return "\n\n".join(sections)


def build_fields(record: TicketRecord, project_key: Optional[str] = None) -> dict[str, Any]:
    summary = re.sub(r"\s+", " ", record.title).strip() or "[No summary provided]"

    fields: dict[str, Any] = {
        "project": {"key": project_key or config.JIRA_PROJECT_KEY},
        "summary": summary,
        "description": _format_adf(format_description(record)),
        "issuetype": {"name": record.issue_type.value},
        "priority": {"name": record.priority.value},
    }
    return fields


def _format_adf(text: str) -> dict[str, Any]:
    """Wrap text in an Atlassian document, one paragraph per blank-line block.

    Line breaks inside a block become ``hardBreak`` nodes.
    """

    blocks = [block for block in (text or "").split("\n\n") if block.strip()]
    if not blocks:
        blocks = ["[No description provided]"]

    content = []
    for block in blocks:
        nodes: list[dict[str, Any]] = []
        for position, line in enumerate(block.split("\n")):
            if position:
                nodes.append({"type": "hardBreak"})
            if line:
                nodes.append({"type": "text", "text": line})
        content.append({"type": "paragraph", "content": nodes})

    return {"type": "doc", "version": 1, "content": content}
