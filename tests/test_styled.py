"""Tests for joblog.styled: styled text and color decision."""
import io

import pytest

from joblog.styled import ColorChoice, Colorizer, RenderError, Style, StyledStr, use_color


class TtyStream(io.StringIO):
    def isatty(self):
        return True


def test_styled_str_plain_text():
    msg = StyledStr("a").warning("b").literal("c").hint("d").error("e").good("f")
    assert msg.plain() == "abcdef"
    assert str(msg) == "abcdef"


def test_empty_pieces_skipped():
    msg = StyledStr().none("").warning("")
    assert msg.pieces == []


def test_stylize_none_style_is_plain():
    msg = StyledStr().stylize(None, "x")
    assert msg.pieces == [(Style.NONE, "x")]


def test_plain_colorizer_never_emits_escapes():
    out = io.StringIO()
    Colorizer(out, color=False).print(StyledStr().error("boom").none(" ok"))
    assert out.getvalue() == "boom ok"


def test_colorizer_styles_pieces():
    rendered = Colorizer(io.StringIO(), color=True).render(StyledStr().warning("warn").none(" raw"))
    assert rendered.startswith("\x1b[")
    assert "warn" in rendered
    assert rendered.endswith(" raw")


def test_colorizer_passes_plain_pieces_verbatim():
    line = "\x1b[32mgreen\x1b[0m"
    assert Colorizer(io.StringIO(), color=True).render(StyledStr(line)) == line


class TestUseColor:
    def test_always_and_never(self):
        assert use_color(ColorChoice.ALWAYS, io.StringIO()) is True
        assert use_color(ColorChoice.NEVER, TtyStream()) is False

    def test_auto_follows_terminal(self, monkeypatch):
        monkeypatch.delenv("FORCE_COLOR", raising=False)
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TTY_COMPATIBLE", raising=False)
        assert use_color(ColorChoice.AUTO, io.StringIO()) is False
        assert use_color(ColorChoice.AUTO, TtyStream()) is True

    def test_auto_respects_no_color(self, monkeypatch):
        monkeypatch.delenv("FORCE_COLOR", raising=False)
        monkeypatch.delenv("TTY_COMPATIBLE", raising=False)
        monkeypatch.setenv("NO_COLOR", "1")
        assert use_color(ColorChoice.AUTO, TtyStream()) is False


def test_unencodable_text_raises_render_error():
    out = io.TextIOWrapper(io.BytesIO(), encoding="ascii")
    with pytest.raises(RenderError, match="Failed to print banner") as exc_info:
        Colorizer(out).print(StyledStr("café"), "banner")
    assert isinstance(exc_info.value.__cause__, UnicodeEncodeError)
