"""
Engine Models Module - Value records shared by every engine component

Handles:
- Entry kinds (directory, archive, file)
- Uniform file entries for on-disk objects and archive members
- Search filters (modified range, name matcher, content term)
- Search hits with line-indexed matches
"""
import re
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from .errors import ConfigurationError


MIN_INSTANT = datetime.min.replace(tzinfo=timezone.utc)
MAX_INSTANT = datetime.max.replace(tzinfo=timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so every comparison is between aware values"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class EntryKind(str, Enum):
    """Storage kind of a path"""
    DIRECTORY = "DIRECTORY"
    ARCHIVE = "ARCHIVE"
    FILE = "FILE"


class SortMethod(str, Enum):
    """Columns the presentation layer may sort a listing by"""
    FILENAME = "FILENAME"
    SIZE = "SIZE"
    MODIFIED = "MODIFIED"
    FILETYPE = "FILETYPE"


class FileEntry(BaseModel):
    """
    Metadata for a real filesystem object or a virtual archive member.

    container_path is the directory or archive holding the entry, so
    `container_path / name` is the path the entry is reached by.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    container_path: Path
    modified_time: datetime
    size: int
    kind: EntryKind

    @field_validator("modified_time")
    @classmethod
    def _aware_modified_time(cls, value: datetime) -> datetime:
        return as_utc(value)

    @property
    def path(self) -> Path:
        return self.container_path / self.name.lstrip("/")

    def __str__(self) -> str:
        return str(self.path)


class NameMatcher(BaseModel):
    """Entry name test: regex full match, or case-insensitive containment"""
    model_config = ConfigDict(frozen=True)

    pattern: str
    regex: bool = False

    @field_validator("regex")
    @classmethod
    def _compilable(cls, value: bool, info) -> bool:
        pattern = info.data.get("pattern")
        if value and pattern is not None:
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ConfigurationError(f"Invalid name pattern {pattern!r}: {exc}") from exc
        return value

    def matches(self, name: str) -> bool:
        if self.regex:
            return re.fullmatch(self.pattern, name) is not None
        return self.pattern.lower() in name.lower()


class SearchFilter(BaseModel):
    """Criteria applied by the collector and, for content_term, the search engine"""
    model_config = ConfigDict(frozen=True)

    modified_from: datetime = MIN_INSTANT
    modified_to: datetime = MAX_INSTANT
    name_matcher: Optional[NameMatcher] = None
    content_term: Optional[str] = None
    recursive: bool = False

    @field_validator("modified_from", "modified_to")
    @classmethod
    def _aware_bounds(cls, value: datetime) -> datetime:
        return as_utc(value)

    def accepts(self, entry: FileEntry) -> bool:
        if not self.modified_from <= entry.modified_time <= self.modified_to:
            return False
        if self.name_matcher is not None and not self.name_matcher.matches(entry.name):
            return False
        return True


class LineMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    line_number: int
    text: str


class SearchHit(BaseModel):
    """A file entry together with every line that matched the search term"""
    model_config = ConfigDict(frozen=True)

    entry: FileEntry
    matches: Tuple[LineMatch, ...]

    @property
    def hit_count(self) -> int:
        return len(self.matches)

    def render(self) -> List[str]:
        """Header line followed by one indented row per matching line"""
        lines = [f"{self.entry.path} ({self.hit_count} hit)"]
        lines.extend(f"\tline {match.line_number}: {match.text}" for match in self.matches)
        return lines
