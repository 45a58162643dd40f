"""Streaming parser for git patch output.

Turns the byte stream printed by ``git log --patch`` or ``git diff`` into
FileChange records. Parsing is lazy: one record is produced at a time, in the
order git printed them, and the stream is read forward only once.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from gitsource.domain.file_change import (
    CommitInfo,
    DiffLine,
    DiffLineType,
    FileChange,
    Hunk,
)

from .errors import PatchParseError

_HUNK_HEADER = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@ ?(.*)$")
_AUTHOR = re.compile(r"^Author:\s*(.*?)\s*<(.*)>\s*$")
_INDEX = re.compile(r"^index ([0-9a-fA-F]+)\.\.([0-9a-fA-F]+)(?: (\d+))?$")

_DEV_NULL = "/dev/null"

_ESCAPES = {
    "a": 0x07,
    "b": 0x08,
    "t": 0x09,
    "n": 0x0A,
    "v": 0x0B,
    "f": 0x0C,
    "r": 0x0D,
    '"': 0x22,
    "\\": 0x5C,
}


def parse_patch(stream: Iterable[bytes]) -> Iterator[FileChange]:
    """Parse patch bytes into a lazy sequence of FileChange records.

    Lines are decoded as UTF-8. Bytes that are not valid UTF-8 are replaced
    with U+FFFD, so the original bytes of such content are not recoverable
    from the records.

    Args:
        stream: Binary lines, e.g. an io.BufferedReader over git's stdout

    Returns:
        Iterator yielding one FileChange per file per commit

    Raises:
        PatchParseError: From the iterator, when malformed text is reached
    """
    return _PatchParser().parse(stream)


# ============================================================
# Name helpers
# ============================================================


def unquote_name(text: str) -> tuple[str, str]:
    """Decode a C-style quoted path as git prints it for unusual names.

    Octal escapes are raw bytes of the UTF-8 encoded name.

    Args:
        text: Text starting with a double quote

    Returns:
        Tuple of (decoded name, text after the closing quote)

    Raises:
        ValueError: If the quoting is malformed
    """
    out = bytearray()
    i = 1
    while i < len(text):
        ch = text[i]
        if ch == '"':
            return out.decode("utf-8", errors="replace"), text[i + 1 :]
        if ch == "\\":
            escape = text[i + 1 : i + 2]
            if escape in _ESCAPES:
                out.append(_ESCAPES[escape])
                i += 2
                continue
            octal = text[i + 1 : i + 4]
            if len(octal) == 3 and all(c in "01234567" for c in octal):
                out.append(int(octal, 8))
                i += 4
                continue
            raise ValueError(f"invalid escape in quoted name: {text!r}")
        out.extend(ch.encode("utf-8"))
        i += 1
    raise ValueError(f"unterminated quoted name: {text!r}")


def _strip_prefix(name: str) -> str:
    """Drop the leading a/ or b/ component."""
    if "/" in name:
        return name.split("/", 1)[1]
    return name


def _parse_name(value: str, strip_prefix: bool = True) -> str:
    """Parse a file name from a ---, +++, rename or copy line."""
    if value.startswith('"'):
        name, _ = unquote_name(value)
    else:
        # git appends a tab after names containing spaces
        name = value.split("\t", 1)[0]
    if name == _DEV_NULL:
        return ""
    return _strip_prefix(name) if strip_prefix else name


def _parse_header_names(rest: str) -> tuple[str, str]:
    """Parse old and new names from the text after ``diff --git ``."""
    if rest.startswith('"'):
        old, remainder = unquote_name(rest)
        remainder = remainder.lstrip(" ")
        new = unquote_name(remainder)[0] if remainder.startswith('"') else remainder
        return _strip_prefix(old), _strip_prefix(new)

    if ' "' in rest:
        old, quoted = rest.split(' "', 1)
        return _strip_prefix(old), _strip_prefix(unquote_name('"' + quoted)[0])

    # Unquoted names are identical unless renamed, so split in the middle
    if len(rest) % 2 == 1:
        half = len(rest) // 2
        old, new = rest[:half], rest[half + 1 :]
        if _strip_prefix(old) == _strip_prefix(new):
            return _strip_prefix(old), _strip_prefix(new)

    match = re.match(r"^a/(.*?) b/(.*)$", rest)
    if match:
        return match.group(1), match.group(2)
    return "", ""


# ============================================================
# Parser
# ============================================================


class _PatchParser:
    """Line-driven state machine over one patch stream."""

    def __init__(self):
        self.line_number = 0
        self.commit: CommitInfo | None = None
        self.message_lines: list[str] | None = None
        self.current: FileChange | None = None
        self.hunk: Hunk | None = None
        self.old_remaining = 0
        self.new_remaining = 0
        self.old_line = 0
        self.new_line = 0
        self.last_line: DiffLine | None = None

    def parse(self, stream: Iterable[bytes]) -> Iterator[FileChange]:
        for raw in stream:
            self.line_number += 1
            if raw.endswith(b"\n"):
                raw = raw[:-1]
            line = raw.decode("utf-8", errors="replace")

            if self.hunk is not None:
                self._parse_hunk_line(self.hunk, line)
                continue

            if line.startswith("\\") and self.last_line is not None:
                self.last_line.no_newline_at_eof = True
                self.last_line = None
                continue
            self.last_line = None

            if line.startswith("commit "):
                yield from self._flush()
                self._start_commit(line)
            elif line.startswith("diff --git "):
                yield from self._flush()
                self._finish_commit_header()
                self._start_file(line[len("diff --git ") :])
            elif line.startswith("diff --cc ") or line.startswith("diff --combined "):
                # Combined merge diffs are not split per file; skip them
                yield from self._flush()
                self._finish_commit_header()
            elif self.current is not None:
                self._parse_file_header(self.current, line)
            elif self.commit is not None and self.message_lines is not None:
                self._parse_commit_header(self.commit, self.message_lines, line)

        if self.hunk is not None:
            raise PatchParseError(
                self.line_number,
                f"hunk truncated in {self.current.name if self.current else '?'}: "
                f"{self.old_remaining} old and {self.new_remaining} new lines missing",
            )
        yield from self._flush()
        self._finish_commit_header()

    # --------------------------------------------------------
    # Commit headers
    # --------------------------------------------------------

    def _start_commit(self, line: str) -> None:
        self._finish_commit_header()
        fields = line.split()
        self.commit = CommitInfo(sha=fields[1] if len(fields) > 1 else "")
        self.message_lines = []

    def _parse_commit_header(
        self, commit: CommitInfo, message_lines: list[str], line: str
    ) -> None:
        if line.startswith("    "):
            message_lines.append(line[4:])
        elif line == "":
            if message_lines:
                message_lines.append("")
        elif line.startswith("Merge:"):
            commit.merge_parents = line[len("Merge:") :].split()
        elif line.startswith("Author:"):
            match = _AUTHOR.match(line)
            if match:
                commit.author_name = match.group(1)
                commit.author_email = match.group(2)
            else:
                commit.author_name = line[len("Author:") :].strip()
        elif line.startswith("Date:") or line.startswith("AuthorDate:"):
            commit.date = line.split(":", 1)[1].strip()

    def _finish_commit_header(self) -> None:
        if self.commit is not None and self.message_lines is not None:
            self.commit.message = "\n".join(self.message_lines).strip()
        self.message_lines = None

    # --------------------------------------------------------
    # File headers
    # --------------------------------------------------------

    def _start_file(self, rest: str) -> None:
        try:
            old_name, new_name = _parse_header_names(rest)
        except ValueError as e:
            raise PatchParseError(self.line_number, str(e)) from e
        self.current = FileChange(old_name=old_name, new_name=new_name, commit=self.commit)

    def _parse_file_header(self, change: FileChange, line: str) -> None:
        try:
            if line.startswith("@@"):
                self._start_hunk(change, line)
            elif line.startswith("--- "):
                change.old_name = _parse_name(line[4:])
            elif line.startswith("+++ "):
                change.new_name = _parse_name(line[4:])
            elif line.startswith("index "):
                match = _INDEX.match(line)
                if match:
                    change.old_oid, change.new_oid = match.group(1), match.group(2)
                    if match.group(3):
                        change.old_mode = change.old_mode or match.group(3)
                        change.new_mode = change.new_mode or match.group(3)
            elif line.startswith("new file mode "):
                change.is_new = True
                change.new_mode = line[len("new file mode ") :]
            elif line.startswith("deleted file mode "):
                change.is_delete = True
                change.old_mode = line[len("deleted file mode ") :]
            elif line.startswith("old mode "):
                change.old_mode = line[len("old mode ") :]
            elif line.startswith("new mode "):
                change.new_mode = line[len("new mode ") :]
            elif line.startswith("rename from "):
                change.is_rename = True
                change.old_name = _parse_name(line[len("rename from ") :], strip_prefix=False)
            elif line.startswith("rename to "):
                change.is_rename = True
                change.new_name = _parse_name(line[len("rename to ") :], strip_prefix=False)
            elif line.startswith("copy from "):
                change.is_copy = True
                change.old_name = _parse_name(line[len("copy from ") :], strip_prefix=False)
            elif line.startswith("copy to "):
                change.is_copy = True
                change.new_name = _parse_name(line[len("copy to ") :], strip_prefix=False)
            elif line.startswith("similarity index "):
                change.similarity = int(line[len("similarity index ") :].rstrip("%"))
            elif line.startswith("Binary files ") or line == "GIT binary patch":
                change.is_binary = True
        except ValueError as e:
            raise PatchParseError(self.line_number, str(e)) from e

    # --------------------------------------------------------
    # Hunks
    # --------------------------------------------------------

    def _start_hunk(self, change: FileChange, line: str) -> None:
        match = _HUNK_HEADER.match(line)
        if not match:
            raise PatchParseError(self.line_number, f"invalid hunk header: {line!r}")
        hunk = Hunk(
            old_start=int(match.group(1)),
            old_length=int(match.group(2)) if match.group(2) is not None else 1,
            new_start=int(match.group(3)),
            new_length=int(match.group(4)) if match.group(4) is not None else 1,
            section=match.group(5),
        )
        change.hunks.append(hunk)
        self.old_remaining = hunk.old_length
        self.new_remaining = hunk.new_length
        self.old_line = hunk.old_start
        self.new_line = hunk.new_start
        self.hunk = hunk if self.old_remaining or self.new_remaining else None

    def _parse_hunk_line(self, hunk: Hunk, line: str) -> None:
        op = line[:1]

        if op == "+" and self.new_remaining > 0:
            diff_line = DiffLine(
                content=line[1:],
                raw_line=line,
                line_type=DiffLineType.ADDED,
                new_line_number=self.new_line,
            )
            self.new_line += 1
            self.new_remaining -= 1
        elif op == "-" and self.old_remaining > 0:
            diff_line = DiffLine(
                content=line[1:],
                raw_line=line,
                line_type=DiffLineType.REMOVED,
                old_line_number=self.old_line,
            )
            self.old_line += 1
            self.old_remaining -= 1
        elif op in (" ", "") and self.old_remaining > 0 and self.new_remaining > 0:
            diff_line = DiffLine(
                content=line[1:],
                raw_line=line,
                line_type=DiffLineType.CONTEXT,
                new_line_number=self.new_line,
                old_line_number=self.old_line,
            )
            self.old_line += 1
            self.new_line += 1
            self.old_remaining -= 1
            self.new_remaining -= 1
        elif op == "\\" and self.last_line is not None:
            self.last_line.no_newline_at_eof = True
            return
        else:
            raise PatchParseError(
                self.line_number,
                f"unexpected line in hunk {hunk.header!r}: {line!r}",
            )

        hunk.lines.append(diff_line)
        self.last_line = diff_line
        if self.old_remaining == 0 and self.new_remaining == 0:
            self.hunk = None

    # --------------------------------------------------------
    # Emitting
    # --------------------------------------------------------

    def _flush(self) -> Iterator[FileChange]:
        change = self.current
        self.current = None
        self.last_line = None
        if change is None:
            return
        if change.is_new:
            change.old_name = ""
        if change.is_delete:
            change.new_name = ""
        yield change
