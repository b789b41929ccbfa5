"""Parser for the tagged-line localization text format."""

import random
import re
import uuid
from enum import Enum
from pathlib import Path
from typing import List, Optional

from ..models.entry import LocalizationEntry, ParseMetadata, ParseResult

# "[Tag] Value" or "[Tag]Value"; the tag ends at the first closing bracket
TAG_LINE_PATTERN = re.compile(r"^\[(.*?)\]\s*(.*)$")
LINE_SPLIT_PATTERN = re.compile(r"\r?\n")


class ParserState(Enum):
    """States of the entry accumulator."""
    IDLE = "idle"
    KEY_OPEN = "key_open"
    KEY_AND_VALUE_OPEN = "key_and_value_open"


def generate_entry_id() -> str:
    """Return a random UUID4 string, without requiring the OS random source."""
    try:
        return str(uuid.uuid4())
    except NotImplementedError:
        return str(uuid.UUID(int=random.getrandbits(128), version=4))


class TxtParser:
    """
    Parser for tagged localization text files.

    Lines are either blank, comments (first non-blank character is ``*``) or
    ``[Tag] Value``. ``LanguageID`` and ``TableID`` fill the metadata,
    ``StringKey``/``Value`` pairs become entries and any other tag is kept
    verbatim in ``raw_header``. Malformed lines are dropped.
    """

    def parse_file(self, file_path: str) -> ParseResult:
        """
        Parse a tagged text file.

        Args:
            file_path: Path to the UTF-8 text file

        Returns:
            ParseResult with entries and header metadata
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        return self.parse(path.read_text(encoding="utf-8-sig"))

    def parse(self, content: str) -> ParseResult:
        """
        Parse tagged text content. Never raises for malformed input.

        Args:
            content: Raw file content

        Returns:
            ParseResult with entries in file order
        """
        # str.strip() does not remove a byte-order mark
        if content.startswith("\ufeff"):
            content = content[1:]
        return _ParseRun().feed(content)


class _ParseRun:
    """State for a single parse call."""

    def __init__(self):
        self.state = ParserState.IDLE
        self.entries: List[LocalizationEntry] = []
        self.language_id: Optional[str] = None
        self.table_id: Optional[str] = None
        self.raw_header: List[str] = []

        self.open_key: Optional[str] = None
        self.open_value: Optional[str] = None
        self.open_table: Optional[str] = None

    def feed(self, content: str) -> ParseResult:
        for line in LINE_SPLIT_PATTERN.split(content):
            self._handle_line(line)

        if self.state == ParserState.KEY_AND_VALUE_OPEN:
            self._emit()

        return ParseResult(
            entries=tuple(self.entries),
            metadata=ParseMetadata(
                language_id=self.language_id,
                table_id=self.table_id,
                raw_header=tuple(self.raw_header),
            ),
        )

    def _handle_line(self, line: str) -> None:
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("*"):
            return

        match = TAG_LINE_PATTERN.match(trimmed)
        if not match:
            return

        tag, value = match.group(1), match.group(2)

        if tag == "LanguageID":
            self.language_id = value
        elif tag == "TableID":
            self.table_id = value or None
        elif tag == "StringKey":
            self._on_string_key(value)
        elif tag == "Value":
            self._on_value(value)
        else:
            self.raw_header.append(line)

    def _on_string_key(self, key: str) -> None:
        if self.state == ParserState.KEY_AND_VALUE_OPEN:
            self._emit()
        # A key still waiting for its value is discarded
        self.open_key = key
        self.open_value = None
        self.open_table = self.table_id
        self.state = ParserState.KEY_OPEN

    def _on_value(self, value: str) -> None:
        if self.state == ParserState.IDLE:
            return
        self.open_value = value
        self.state = ParserState.KEY_AND_VALUE_OPEN

    def _emit(self) -> None:
        self.entries.append(
            LocalizationEntry(
                id=generate_entry_id(),
                string_key=self.open_key,
                original_value=self.open_value,
                table_id=self.open_table,
            )
        )
        self.open_key = None
        self.open_value = None
        self.open_table = None
        self.state = ParserState.IDLE
