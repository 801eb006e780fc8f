"""Subtask file parser.

The format is a header line naming the project and parent issue, followed
by sections that each become one subtask::

    @PROJ:STORY-123
    ## Write the migration || 3
    Any text below a section marker becomes
    the description of that subtask.
    ## Review || 1

Only the first line is checked for the header. A section marker is a line
starting with ``##``, a title, ``||`` and a whole number of hours. Lines
that do not match a marker are description text of the open section, and
are dropped while no section is open.
"""

import re
from pathlib import Path
from typing import NamedTuple

from jira_subtask_generator.exceptions import BatchParseError
from jira_subtask_generator.models import Subtask, SubtaskBatch
from jira_subtask_generator.utils.logger import get_logger

logger = get_logger(__name__)

HEADER_PATTERN = re.compile(r"^@([A-Za-z0-9]+):([A-Za-z0-9\-]+)")
SECTION_PATTERN = re.compile(r"^##\s*(.+?)\s*\|\|\s*([0-9]+)")
LINE_BREAK_PATTERN = re.compile(r"\r\n|\n|\r")

DEFAULT_NEWLINE = "\n"


class ParseResult(NamedTuple):
    """Outcome of a parse attempt.

    ``batch`` is always a well-formed batch: the parsed one on success,
    the empty sentinel on failure.
    """

    success: bool
    batch: SubtaskBatch


class MarkdownParser:
    """Parser for subtask batch files."""

    def __init__(self, newline: str | None = None):
        """Initialize parser.

        Args:
            newline: Terminator appended to each description line. When None,
                the first line terminator found in the input is used.
        """
        self.newline = newline

    def try_parse(self, text: str) -> ParseResult:
        """Parse text into a subtask batch.

        Never raises for malformed content. A missing or malformed header
        yields ``success=False`` with the empty batch, even if sections were
        found further down.

        Args:
            text: Full file content.

        Returns:
            ParseResult with the success flag and batch.
        """
        lines = LINE_BREAK_PATTERN.split(text)
        newline = self.newline or _detect_newline(text)

        project_key = ""
        parent_key = ""
        header = HEADER_PATTERN.match(lines[0])
        if header:
            project_key, parent_key = header.group(1), header.group(2)
        else:
            logger.warning(f"Missing or malformed header line: {lines[0][:80]!r}")

        subtasks: list[Subtask] = []
        title = ""
        estimated_hours = 0.0
        description: list[str] = []

        for line in lines[1:]:
            line = line.strip()
            section = _match_section(line)

            if section is None:
                description.append(line + newline)
                continue

            if title:
                subtasks.append(_finish(title, description, estimated_hours))

            title, estimated_hours = section
            description = []

        if title:
            subtasks.append(_finish(title, description, estimated_hours))

        if not (project_key and parent_key):
            return ParseResult(False, SubtaskBatch.empty())

        return ParseResult(
            True,
            SubtaskBatch(
                project_key=project_key,
                parent_key=parent_key,
                subtasks=tuple(subtasks),
            ),
        )

    def parse(self, text: str, file_path: str | None = None) -> SubtaskBatch:
        """Parse text, raising if it is not a valid batch.

        Raises:
            BatchParseError: If the header line is missing or malformed.
        """
        success, batch = self.try_parse(text)
        if not success:
            raise BatchParseError(
                "First line must be a header of the form @PROJECT:PARENT-KEY",
                file_path,
            )
        return batch

    def parse_file(self, file_path: str | Path) -> ParseResult:
        """Read a subtask file and parse it.

        Raises:
            FileNotFoundError: If file does not exist.
            BatchParseError: If the file cannot be read.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Subtask file not found: {path}")

        try:
            # newline="" keeps \r\n and \r intact for the line splitter
            with open(path, encoding="utf-8-sig", newline="") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise BatchParseError(f"Failed to read file: {e}", str(path)) from None

        logger.debug(f"Read {len(content)} characters from {path}")
        return self.try_parse(content)


def try_parse(text: str) -> ParseResult:
    """Parse text with a default :class:`MarkdownParser`."""
    return MarkdownParser().try_parse(text)


def _match_section(line: str) -> tuple[str, float] | None:
    """Match a trimmed line against the section marker grammar."""
    match = SECTION_PATTERN.match(line)
    if not match:
        return None
    title = match.group(1).strip()
    if not title:
        return None
    return title, float(match.group(2))


def _finish(title: str, description: list[str], estimated_hours: float) -> Subtask:
    logger.debug(f"Parsed subtask: {title!r} ({estimated_hours}h)")
    return Subtask(
        title=title,
        description="".join(description),
        estimated_hours=estimated_hours,
    )


def _detect_newline(text: str) -> str:
    match = LINE_BREAK_PATTERN.search(text)
    return match.group(0) if match else DEFAULT_NEWLINE
