"""Draft files: the last input and its generated output, kept between runs.

WHY: A long post is often written over several sessions. Keeping the raw
input next to the output it produced means work survives a restart and the
same stutters can be re-sent later.

HOW: A draft is a plain text file with two marked sections::

    ---INPUT---
    <input text>
    ---OUTPUT---
    <output text>

parse_draft() is lenient: a file without markers is taken as input only,
and a file with only the input marker has no output.

RULES:
- Markers are matched exactly (case-sensitive) at their first occurrence.
- Surrounding line breaks of each section are trimmed on parse.
- load_draft() returns None for a missing or blank file.
- clear_draft() deletes the file if present and reports whether it existed.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

INPUT_MARKER = "---INPUT---"
OUTPUT_MARKER = "---OUTPUT---"


@dataclass
class Draft:
    input_text: str = ""
    output_text: str = ""


def format_draft(draft: Draft) -> str:
    return "{}\n{}\n{}\n{}\n".format(
        INPUT_MARKER, draft.input_text, OUTPUT_MARKER, draft.output_text
    )


def parse_draft(contents: str) -> Draft:
    """Parse draft file contents into a Draft."""
    input_index = contents.find(INPUT_MARKER)
    if input_index < 0:
        return Draft(input_text=contents)

    input_start = input_index + len(INPUT_MARKER)
    output_index = contents.find(OUTPUT_MARKER, input_start)
    if output_index < 0:
        return Draft(input_text=contents[input_start:].lstrip("\r\n"))

    return Draft(
        input_text=contents[input_start:output_index].strip("\r\n"),
        output_text=contents[output_index + len(OUTPUT_MARKER):].strip("\r\n"),
    )


def save_draft(draft: Draft, path: str | Path) -> Path:
    out = Path(path)
    out.write_text(format_draft(draft), encoding="utf-8")
    return out


def load_draft(path: str | Path) -> Optional[Draft]:
    draft_path = Path(path)
    if not draft_path.is_file():
        return None
    contents = draft_path.read_text(encoding="utf-8")
    if not contents.strip():
        return None
    return parse_draft(contents)


def clear_draft(path: str | Path) -> bool:
    draft_path = Path(path)
    if draft_path.is_file():
        draft_path.unlink()
        return True
    return False
