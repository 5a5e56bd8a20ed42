"""Unit tests for draft files.

RULES:
- All file I/O tests use tmp_path fixtures for isolation.
"""

from stutter_writer.drafts import (
    Draft,
    clear_draft,
    format_draft,
    load_draft,
    parse_draft,
    save_draft,
)


class TestDraftFormat:

    def test_format(self):
        text = format_draft(Draft("in", "out"))
        assert text == "---INPUT---\nin\n---OUTPUT---\nout\n"

    def test_parse_both_sections(self):
        draft = parse_draft('---INPUT---\n"hello"\n---OUTPUT---\n"h-hello"\n')
        assert draft == Draft('"hello"', '"h-hello"')

    def test_parse_multiline_sections(self):
        draft = parse_draft("---INPUT---\r\nline one\r\nline two\r\n---OUTPUT---\r\nout\r\n")
        assert draft.input_text == "line one\r\nline two"
        assert draft.output_text == "out"

    def test_parse_without_markers(self):
        assert parse_draft("plain text") == Draft("plain text", "")

    def test_parse_input_only(self):
        assert parse_draft("---INPUT---\n\nsome input") == Draft("some input", "")


class TestDraftFiles:

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "draft.txt"
        save_draft(Draft('she says "hi"', 'she says "h-hi"'), path)
        assert load_draft(path) == Draft('she says "hi"', 'she says "h-hi"')

    def test_load_missing(self, tmp_path):
        assert load_draft(tmp_path / "none.txt") is None

    def test_load_blank(self, tmp_path):
        path = tmp_path / "draft.txt"
        path.write_text("  \n", encoding="utf-8")
        assert load_draft(path) is None

    def test_clear(self, tmp_path):
        path = tmp_path / "draft.txt"
        save_draft(Draft("a", "b"), path)
        assert clear_draft(path) is True
        assert not path.exists()
        assert clear_draft(path) is False
