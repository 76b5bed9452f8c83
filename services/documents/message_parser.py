"""
Administrator free-text message -> structured request.

The message field mixes a machine-written list ("المطلوب:" + bullets) with
optional human prose. Everything that reads it goes through this module.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from core.config import settings
from domain.models import AdminMessageInfo, MessageKind

logger = logging.getLogger(__name__)

_BULLET = re.compile("^[" + re.escape("".join(settings.BULLET_MARKERS)) + r"]\s*")


def _lines(text: str) -> list[str]:
    return [s.strip() for s in text.split("\n") if s.strip()]


def is_header(line: str) -> bool:
    return line.startswith(settings.REQUEST_HEADER)


def is_bullet(line: str) -> bool:
    return line.startswith(settings.BULLET_MARKERS)


def strip_bullet(line: str) -> str:
    return _BULLET.sub("", line.strip()).strip()


def is_just_doc_list(message: str | None) -> bool:
    """True when the message is a header followed only by bullet lines."""
    if not message:
        return False
    trimmed = message.strip()
    if len(trimmed) < settings.MIN_MESSAGE_LENGTH:
        return False

    lines = _lines(trimmed)
    if not lines or not is_header(lines[0]):
        return False
    # header alone is a (degenerate) empty request
    return all(is_bullet(line) for line in lines[1:])


def extract_requested_labels(message: str | None) -> list[str]:
    """Bullet labels that follow the header line, in message order, unique."""
    if not message:
        return []
    labels: list[str] = []
    after_header = False
    for line in _lines(message):
        if is_header(line):
            after_header = True
            continue
        if after_header and is_bullet(line):
            label = strip_bullet(line)
            if label and label not in labels:
                labels.append(label)
    return labels


def format_message(trimmed: str) -> str:
    lines = trimmed.split("\n")
    if lines and is_header(lines[0]):
        lines = lines[1:]
    out: list[str] = []
    for line in lines:
        line = line.strip()
        if not line:
            continue
        if is_bullet(line):
            line = _BULLET.sub("• ", line)
        out.append(line)
    return "\n".join(out)


def parse_admin_message(message: str | None) -> AdminMessageInfo:
    if not message:
        return AdminMessageInfo()

    trimmed = message.strip()
    if (
        len(trimmed) < settings.MIN_MESSAGE_LENGTH
        or trimmed.lower() in settings.GENERIC_ACKNOWLEDGEMENTS
    ):
        logger.debug("admin message ignored as acknowledgement/short (%d chars)", len(trimmed))
        return AdminMessageInfo(raw_message=trimmed)

    just_list = is_just_doc_list(trimmed)
    if just_list:
        kind = MessageKind.DOC_LIST_ONLY
    elif is_header(trimmed):
        kind = MessageKind.DOC_LIST_WITH_NOTE
    else:
        kind = MessageKind.FREE_TEXT

    return AdminMessageInfo(
        has_content=True,
        is_just_doc_list=just_list,
        formatted_message=format_message(trimmed),
        raw_message=trimmed,
        kind=kind,
        requested_labels=extract_requested_labels(trimmed),
    )


def compose_request_message(labels: Iterable[str], note: str | None = None) -> str:
    """
    Build the message an administrator sends when requesting documents:

        المطلوب:
        • label 1
        • label 2

        optional note
    """
    clean: list[str] = []
    for label in labels:
        label = strip_bullet(label or "")
        if label and label not in clean:
            clean.append(label)

    parts: list[str] = []
    if clean:
        parts.append(f"{settings.REQUEST_HEADER}:\n" + "\n".join(f"• {x}" for x in clean))
    if note and note.strip():
        parts.append(note.strip())
    return "\n\n".join(parts)
