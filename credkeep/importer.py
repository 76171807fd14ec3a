"""
credkeep.importer

Turn pasted text or CSV content into credential records.

Two formats are understood:
- "csv": a header row followed by rows of
  Service,Username,Password,Category,Notes
- "text": a single loosely structured block, e.g.

      Gmail
      Username: user@gmail.com
      Password: Secr3t!

The parser is best effort. It never raises on malformed input; it just
returns fewer (or zero) records.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from .records import DEFAULT_CATEGORY, make_credential

logger = logging.getLogger(__name__)

CSV = "csv"
TEXT = "text"

_PAREN_SUFFIX = re.compile(r"\(.*\)")
_MULTI_SPACE = re.compile(r"\s{2,}")
_COLUMN_SPLIT = re.compile(r"\t|\s{2,}")
_USERNAME_LINE = re.compile(r"^username:", re.IGNORECASE)
_PASSWORD_LINE = re.compile(r"^password:", re.IGNORECASE)
_PIN_LINE = re.compile(r"^pin:", re.IGNORECASE)
_QUESTIONS_LINE = re.compile(r"^questions:", re.IGNORECASE)

Credential = Dict[str, Any]


def detect_format(text: str) -> str:
    """CSV when the first line names the service, username and password columns."""
    first_line = text.split("\n")[0].strip().lower()
    if "service" in first_line and "username" in first_line and "password" in first_line:
        return CSV
    return TEXT


def detect_format_from_filename(filename: str) -> str:
    return CSV if filename.lower().endswith(".csv") else TEXT


def _clean_lines(text: str) -> List[str]:
    return [line.strip() for line in text.split("\n") if line.strip()]


def split_csv_line(line: str) -> List[str]:
    """
    Split one CSV row on commas. A double quote toggles the in-quotes state
    and is dropped; commas inside quotes are kept. Escaped quotes ("") are
    not special.
    """
    fields = []
    current = []
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
    fields.append("".join(current))
    return fields


def parse_csv(text: str) -> List[Credential]:
    lines = _clean_lines(text)
    if len(lines) <= 1:
        return []

    credentials = []
    # first line is the header
    for lineno, line in enumerate(lines[1:], start=2):
        fields = split_csv_line(line)
        if len(fields) < 2:
            logger.debug("Skipping CSV row %d: fewer than 2 fields", lineno)
            continue
        fields += [""] * (5 - len(fields))
        service, username, password, category, notes = fields[:5]
        if not service:
            logger.debug("Skipping CSV row %d: empty service name", lineno)
            continue
        credentials.append(
            make_credential(
                service,
                username=username,
                password=password,
                category=category or DEFAULT_CATEGORY,
                notes=notes,
            )
        )
    return credentials


def _has_columns(line: str) -> bool:
    return "\t" in line or bool(_MULTI_SPACE.search(line))


def _columns(line: str) -> List[str]:
    return [p.strip() for p in _COLUMN_SPLIT.split(line) if p.strip()]


def _after_colon(line: str) -> str:
    return line.split(":", 1)[1].strip()


def _is_category_line(line: str) -> bool:
    return "@" not in line and "\t" not in line and not _MULTI_SPACE.search(line)


def _scan_signals(body: List[str]) -> Tuple[str, str, str, str]:
    """First pass: explicit username, column email, column password, explicit password."""
    explicit_username = ""
    column_email = ""
    column_password = ""
    explicit_password = ""

    for line in body:
        if _USERNAME_LINE.match(line):
            explicit_username = _after_colon(line)
            break

    for line in body:
        if _has_columns(line):
            parts = _columns(line)
            if len(parts) >= 2:
                if "@" in parts[0]:
                    column_email = parts[0]
                column_password = parts[1]
                break

    for line in body:
        if _PASSWORD_LINE.match(line):
            explicit_password = _after_colon(line)
            break

    return explicit_username, column_email, column_password, explicit_password


def parse_text(text: str) -> List[Credential]:
    """
    Parse one free-form credential block.

    Line 0 is the service name (a parenthesised suffix is dropped). Line 1 is
    a category label when it holds no '@' and no column layout. The rest is
    scanned for username/password signals; anything unclaimed ends up in
    the notes.
    """
    lines = _clean_lines(text)
    if not lines:
        return []

    name = _PAREN_SUFFIX.sub("", lines[0], count=1).strip()

    category = DEFAULT_CATEGORY
    start = 1
    if len(lines) > 1 and _is_category_line(lines[1]):
        category = lines[1]
        start = 2
    body = lines[start:]

    explicit_username, column_email, column_password, explicit_password = _scan_signals(body)
    username = explicit_username or column_email
    password = explicit_password or column_password
    notes: List[str] = []

    for line in body:
        if _USERNAME_LINE.match(line) or _PASSWORD_LINE.match(line):
            continue

        if _has_columns(line):
            parts = _columns(line)
            if len(parts) >= 2:
                if explicit_username and "@" in parts[0]:
                    notes.append(parts[0])
                if not password:
                    password = parts[1]
                notes.extend(parts[2:])
                continue

        if _PIN_LINE.match(line):
            notes.append(line)
            continue

        if _QUESTIONS_LINE.match(line):
            notes.append("Questions:")
            continue

        if "@" in line:
            if explicit_username:
                notes.append(line)
            elif not username:
                username = line
            else:
                notes.append(line)
            continue

        if not password and ":" not in line and len(line) > 3:
            password = line
            continue

        notes.append(line)

    if username or password:
        return [
            make_credential(
                name,
                username=username,
                password=password,
                category=category,
                notes="\n".join(notes) if notes else None,
            )
        ]
    if notes:
        logger.debug("No username or password found for %r; keeping notes only", name)
        return [make_credential(name, category=category, notes="\n".join(notes), strength="weak")]
    return []


def parse_credentials(text: str, fmt: Optional[str] = None) -> List[Credential]:
    """
    Parse `text` as `fmt` ("csv" or "text"). With no format given the
    format is detected from the first line. An empty list means nothing
    importable was found.
    """
    if fmt is None:
        fmt = detect_format(text)
    if fmt == CSV:
        credentials = parse_csv(text)
    else:
        credentials = parse_text(text)
    logger.debug("Parsed %d credential(s) as %s", len(credentials), fmt)
    return credentials
