"""Parse GitLab job log section markers (section_start / section_end)."""
from dataclasses import dataclass
from enum import Enum

# https://docs.gitlab.com/ee/ci/jobs/#expand-and-collapse-job-log-sections
COLLAPSED_FLAG = "collapsed=true"


class SectionKind(Enum):
    START = "section_start"
    END = "section_end"

    @property
    def label(self) -> str:
        return "start" if self is SectionKind.START else "end"


class NotAMarker(ValueError):
    """Text is not a well-formed section marker."""


@dataclass(frozen=True)
class SectionMarker:
    kind: SectionKind
    name: str
    collapsed: bool = False


@dataclass(frozen=True)
class Section:
    """Entry of the open sections stack."""

    name: str
    collapsed: bool = False

    @classmethod
    def from_marker(cls, marker: SectionMarker) -> "Section":
        return cls(name=marker.name, collapsed=marker.collapsed)


def _split_flags(field: str) -> tuple[str, str | None]:
    """Split 'name[flags]' into (name, flags). No bracket pair -> (field, None)."""
    i = field.find("[")
    if i < 0:
        return field, None
    j = field.find("]", i + 1)
    if j < 0:
        return field, None
    return field[:i], field[i + 1:j]


def parse_marker(text: str) -> SectionMarker:
    """
    Parse one segment of log text as a section marker.
    Format: section_start:<timestamp>:<name>[flags] or section_end:<timestamp>:<name>.
    Raises NotAMarker for anything else.
    """
    # producers may put carriage returns before the keyword; indented text is not a marker
    s = text.lstrip("\r")
    if not (s.startswith("section_start:") or s.startswith("section_end:")):
        raise NotAMarker(text)
    fields = s.rstrip().split(":")
    if len(fields) != 3:
        raise NotAMarker(text)
    keyword, _timestamp, name_flags = fields
    try:
        kind = SectionKind(keyword)
    except ValueError as e:
        raise NotAMarker(text) from e
    name, flags = _split_flags(name_flags)
    return SectionMarker(kind=kind, name=name, collapsed=(flags == COLLAPSED_FLAG))


def try_parse_marker(text: str) -> SectionMarker | None:
    try:
        return parse_marker(text)
    except NotAMarker:
        return None
