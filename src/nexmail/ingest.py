# =============================================================================
# Message Import
# =============================================================================
# Reads RFC 5322 (.eml) files into EmailContent so they can be triaged into
# the local mailbox.
#
# Parsing uses the standard library email package. Bodies are reduced to
# plain text: a text/plain part is preferred, otherwise the HTML part is
# converted with inscriptis (which copes well with table-heavy mail HTML).
# =============================================================================

import email
import email.header
import email.utils
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from email.message import Message as MIMEMessage
from pathlib import Path

from inscriptis import get_text
from inscriptis.css_profiles import CSS_PROFILES
from inscriptis.model.config import ParserConfig

from nexmail.core import EmailContent


logger = logging.getLogger(__name__)

# Links are shown inline so the URL heuristics still see them
_HTML_CONFIG = ParserConfig(
    css=CSS_PROFILES["strict"],
    display_links=True,
    display_images=False,
    display_anchors=False,
)


class EmailImportError(Exception):
    """Raised when a file cannot be read or is not an email."""
    pass


@dataclass
class ImportedEmail:
    """
    Result of parsing one file.

    Attributes:
        content: The text fields for classification.
        date: The Date header, if present and parseable.
        path: Source file.
    """
    content: EmailContent
    date: datetime | None
    path: Path


def load_eml(path: Path) -> ImportedEmail:
    """
    Parse an .eml file.

    Args:
        path: File to read.

    Returns:
        The parsed email.

    Raises:
        EmailImportError: If the file is unreadable or has no email headers.
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise EmailImportError(f"Cannot read {path}: {e}") from e

    msg = email.message_from_bytes(raw)
    if not msg.keys():
        raise EmailImportError(f"{path} does not look like an email message")

    content = EmailContent(
        sender=_parse_sender(msg.get("From", "")),
        to=decode_header(msg.get("To", "")),
        subject=decode_header(msg.get("Subject", "")),
        body=extract_body(msg),
    )
    logger.debug(f"Parsed {path}: from={content.sender!r} subject={content.subject!r}")

    return ImportedEmail(content=content, date=_parse_date(msg.get("Date")), path=path)


def decode_header(value: str) -> str:
    """Decode an RFC 2047 encoded header value."""
    if not value:
        return ""
    try:
        result = ""
        for part, charset in email.header.decode_header(value):
            if isinstance(part, bytes):
                result += part.decode(charset or "utf-8", errors="replace")
            else:
                result += part
        return result
    except (LookupError, ValueError):
        return str(value)


def extract_body(msg: MIMEMessage) -> str:
    """
    Get the plain text body of a message.

    Prefers the first text/plain part; falls back to the first text/html
    part rendered to text. Attachments are ignored.
    """
    body_text = ""
    body_html = ""

    if msg.is_multipart():
        for part in msg.walk():
            if part.is_multipart():
                continue
            if "attachment" in str(part.get("Content-Disposition", "")):
                continue

            content_type = part.get_content_type()
            if content_type == "text/plain" and not body_text:
                body_text = _decode_part(part)
            elif content_type == "text/html" and not body_html:
                body_html = _decode_part(part)
    else:
        content_type = msg.get_content_type()
        if content_type == "text/html":
            body_html = _decode_part(msg)
        else:
            body_text = _decode_part(msg)

    if body_text.strip():
        return body_text.strip()
    return html_to_text(body_html)


def html_to_text(html: str) -> str:
    """Convert an HTML body to plain text."""
    if not html or not html.strip():
        return ""
    # Style and script blocks only add noise
    html = re.sub(r"<(style|script)[^>]*>.*?</\1>", "", html, flags=re.DOTALL | re.IGNORECASE)
    text = get_text(html, _HTML_CONFIG)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return "\n".join(line.rstrip() for line in text.split("\n")).strip()


def _decode_part(part: MIMEMessage) -> str:
    payload = part.get_payload(decode=True)
    if isinstance(payload, bytes):
        charset = part.get_content_charset() or "utf-8"
        try:
            return payload.decode(charset, errors="replace")
        except LookupError:
            return payload.decode("utf-8", errors="replace")
    return str(payload) if payload else ""


def _parse_sender(value: str) -> str:
    """Bare address from a From header; the decoded header if none parses."""
    decoded = decode_header(value)
    _, address = email.utils.parseaddr(decoded)
    return address or decoded.strip()


def _parse_date(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        date = email.utils.parsedate_to_datetime(value)
    except (TypeError, ValueError):
        logger.warning(f"Unparseable Date header: {value!r}")
        return None
    # Stored timestamps are naive local time
    if date.tzinfo is not None:
        date = date.astimezone().replace(tzinfo=None)
    return date
