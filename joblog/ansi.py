"""Split a log line into SGR-styled text segments.

Every escape sequence ends the current segment. Only SGR sequences (CSI ... m)
change the effect; the rest (erase line, cursor moves, OSC titles) are dropped.
"""
import re

# CSI: ESC [ params intermediates final, OSC: ESC ] ... BEL|ST, and two-byte escapes
ESCAPE_RE = re.compile(
    r"\x1b\[([0-?]*)[ -/]*([@-~])"
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"
    r"|\x1b[@-Z\\-_]"
    # truncated CSI or a stray ESC
    r"|\x1b(?:\[[0-?]*[ -/]*)?"
)

# Extended colors carry their own arguments: 38;5;n / 38;2;r;g;b
_EXTENDED_COLOR = {"38", "48", "58"}


def apply_sgr(effect: str, params: str) -> str:
    """Return the effect active after SGR `params` on top of `effect` ("" is the default style)."""
    codes = [c for c in effect.split(";") if c]
    parts = params.replace(":", ";").split(";")
    i = 0
    while i < len(parts):
        p = parts[i]
        if p in ("", "0"):
            codes = []
            i += 1
            continue
        if p in _EXTENDED_COLOR and i + 1 < len(parts):
            width = 3 if parts[i + 1] == "5" else 5 if parts[i + 1] == "2" else 1
            codes.extend(parts[i:i + width])
            i += width
            continue
        codes.append(p)
        i += 1
    return ";".join(codes)


def sgr_segments(line: str) -> list[tuple[str, str]]:
    """Return the ordered (effect, text) runs of `line`; empty runs are skipped."""
    segments: list[tuple[str, str]] = []
    effect = ""
    pos = 0
    for m in ESCAPE_RE.finditer(line):
        if m.start() > pos:
            segments.append((effect, line[pos:m.start()]))
        if m.group(2) == "m":
            effect = apply_sgr(effect, m.group(1))
        pos = m.end()
    if pos < len(line):
        segments.append((effect, line[pos:]))
    return segments
