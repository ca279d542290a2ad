"""Render a GitLab job log: section banners, step filter, collapsed sections."""
import logging
import sys
from dataclasses import dataclass, field
from typing import Iterator, TextIO

from joblog.ansi import sgr_segments
from joblog.report import Job, print_job_header
from joblog.sections import Section, SectionKind, SectionMarker, try_parse_marker
from joblog.styled import ColorChoice, Colorizer, StyledStr, use_color

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogFilter:
    """all: show every section body. step: the one section shown when all is False."""

    all: bool = False
    step: str = ""


@dataclass
class RenderState:
    # pending is None while scanning text; otherwise the marker waiting for its next segment
    pending: SectionMarker | None = None
    stack: list[Section] = field(default_factory=list)

    def show_line(self, log_filter: LogFilter) -> bool:
        if log_filter.all or not self.stack:
            return True
        # collapsed sections hide their body, whatever the step filter says
        return all(not s.collapsed for s in self.stack) and any(s.name == log_filter.step for s in self.stack)

    def push(self, marker: SectionMarker) -> Section:
        section = Section.from_marker(marker)
        self.stack.append(section)
        logger.debug("Open section %s (collapsed=%s, depth=%d)", section.name, section.collapsed, len(self.stack))
        return section

    def pop(self) -> Section | None:
        if not self.stack:
            logger.debug("section_end with no open section")
            return None
        section = self.stack.pop()
        logger.debug("Close section %s (depth=%d)", section.name, len(self.stack))
        return section


def iter_lines(log: bytes) -> Iterator[str]:
    """Yield log lines without their terminator ('\\n' or '\\r\\n'). Invalid UTF-8 is replaced."""
    lines = log.decode("utf-8", errors="replace").split("\n")
    if lines[-1] == "":
        lines.pop()
    for line in lines:
        yield line[:-1] if line.endswith("\r") else line


class LogRenderer:
    """Single pass over a log; one instance can render several logs."""

    def __init__(self, log_filter: LogFilter, colorizer: Colorizer):
        self.log_filter = log_filter
        self.sink = colorizer

    @property
    def colored(self) -> bool:
        return self.sink.color

    def print_section(self, title: str, section: Section, show_line: bool) -> None:
        msg = StyledStr()
        msg.warning(f"\n> {title} [")
        msg.literal(section.name)
        msg.warning("]")
        if not show_line:
            msg.warning(" <")
            if section.collapsed and self.colored:
                msg.none("\n")
        msg.none("\n")
        self.sink.print(msg, "section banner")

    def _apply_marker(self, state: RenderState, text: str | None) -> bool:
        """Apply state.pending using the segment that follows it (None at end of line). Returns show_line."""
        marker = state.pending
        if marker.kind is SectionKind.START:
            section = state.push(marker)
            show_line = state.show_line(self.log_filter)
            self.print_section(text if text is not None else marker.kind.label, section, show_line)
            state.pending = None
            if self.colored:
                # the banner replaces this line
                if show_line:
                    self.sink.print(StyledStr("\n"), "section separator")
                show_line = False
            return show_line

        body_shown = state.show_line(self.log_filter)
        section = state.pop() or Section.from_marker(marker)
        show_line = state.show_line(self.log_filter)
        # adjacent markers: the segment after section_end may open or close the next section
        state.pending = try_parse_marker(text) if text is not None else None
        title = text if text is not None and state.pending is None else marker.kind.label
        self.print_section(title, section, body_shown)
        if self.colored:
            show_line = False
        return show_line

    def render(self, log: bytes) -> None:
        state = RenderState()
        for line in iter_lines(log):
            # text before a marker keeps the visibility of the previous line
            show_line = state.show_line(self.log_filter)
            for _effect, text in sgr_segments(line):
                if state.pending is not None:
                    show_line = self._apply_marker(state, text)
                    continue
                marker = try_parse_marker(text)
                if marker is not None:
                    state.pending = marker
                elif show_line and not self.colored:
                    self.sink.print(StyledStr(text), "log segment")
            if state.pending is not None:
                show_line = self._apply_marker(state, None)
            if show_line:
                msg = StyledStr()
                if self.colored:
                    msg.none(line)
                msg.none("\n")
                self.sink.print(msg, "log line")


def render_log(
    log: bytes,
    log_filter: LogFilter,
    mode: ColorChoice = ColorChoice.AUTO,
    out: TextIO | None = None,
) -> None:
    """Render `log` to `out` (stdout by default). Raises RenderError if writing fails."""
    out = out or sys.stdout
    colorizer = Colorizer(out, use_color(mode, out))
    LogRenderer(log_filter, colorizer).render(log)
    colorizer.flush()


def print_log(
    log: bytes,
    job: Job,
    log_filter: LogFilter,
    mode: ColorChoice = ColorChoice.AUTO,
    out: TextIO | None = None,
) -> None:
    """Print the 'Log for job ...' header, then the rendered log."""
    out = out or sys.stdout
    print_job_header(job, Colorizer(out, use_color(mode, out)))
    render_log(log, log_filter, mode, out)
