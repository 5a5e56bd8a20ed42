"""Command-line interface for Stutter Writer.

WHY: Writers draft posts in their own editor and want the stuttered,
chat-sized messages without opening any UI. The CLI runs read,
transform, split and draft-save behind one command.

HOW: argparse collects the input source, settings file and per-run
overrides (preset, mode, seed stability), the chat budget and header.
The text is transformed, split with build_chat_messages(), and the
messages are written to stdout (or --output) separated by blank lines.
Status messages go to stderr.

RULES:
- Input: a file path, "-" for stdin (default), or --from-draft.
- Settings: --settings FILE, else STUTTER_SETTINGS_FILE, else defaults;
  --preset/--mode/--stable-seed override the loaded values.
- --chat-mode none disables the header; default from STUTTER_CHAT_MODE.
- --draft FILE saves input and output as a draft after generating.
- Exit codes: 0 = success, 1 = error (message on stderr).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from stutter_writer.config import (
    CHAT_MODES,
    DEFAULT_CHAT_MODE,
    DEFAULT_DRAFT_PATH,
    DEFAULT_SETTINGS_PATH,
    MAX_TEXT_CHARS,
    load_max_chat_chars,
    normalize_chat_mode,
)
from stutter_writer.core.chunker import build_chat_messages
from stutter_writer.core.settings import StrengthPreset, StutterMode, StutterSettings
from stutter_writer.core.transform import transform
from stutter_writer.drafts import Draft, load_draft, save_draft
from stutter_writer.settings_file import load_settings, save_settings

logger = logging.getLogger(__name__)

MESSAGE_SEPARATOR = "\n\n"


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _read_input(args: argparse.Namespace) -> str:
    if args.from_draft:
        draft = load_draft(args.draft or DEFAULT_DRAFT_PATH)
        if draft is None:
            raise ValueError("No draft found at {}".format(args.draft or DEFAULT_DRAFT_PATH))
        return draft.input_text
    if args.input_file == "-":
        return sys.stdin.read()
    return Path(args.input_file).read_text(encoding="utf-8")


def _resolve_settings(args: argparse.Namespace) -> StutterSettings:
    """Load the settings file (if any) and apply command-line overrides."""
    settings_path = args.settings or DEFAULT_SETTINGS_PATH
    if settings_path:
        settings = load_settings(settings_path)
        logger.info("Loaded settings from %s", settings_path)
    else:
        settings = StutterSettings()

    if args.preset:
        settings.strength_preset = StrengthPreset[args.preset.upper()]
    if args.mode:
        settings.mode = StutterMode[args.mode.upper()]
    if args.stable_seed is not None:
        settings.stable_seed = args.stable_seed
    return settings


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate from main() for tests)."""
    parser = argparse.ArgumentParser(
        prog="stutter_writer",
        description="Stutter quoted dialogue and split it into chat-sized messages.",
    )

    parser.add_argument(
        "input_file",
        nargs="?",
        default="-",
        help="Text file to transform, or '-' for stdin (default).",
    )

    parser.add_argument(
        "--settings",
        default=None,
        help="Path to a JSON settings file (default: STUTTER_SETTINGS_FILE).",
    )

    parser.add_argument(
        "--preset",
        choices=[p.name.lower() for p in StrengthPreset],
        default=None,
        help="Override the strength preset.",
    )

    parser.add_argument(
        "--mode",
        choices=[m.name.lower() for m in StutterMode],
        default=None,
        help="Override the stutter mode (custom preset only).",
    )

    parser.add_argument(
        "--stable-seed",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Derive the random seed from text and settings so output is repeatable.",
    )

    parser.add_argument(
        "--max-chars",
        type=int,
        default=None,
        help="Characters per chat message (default: STUTTER_MAX_CHAT_CHARS or 500).",
    )

    parser.add_argument(
        "--chat-mode",
        default=DEFAULT_CHAT_MODE,
        help="Header prefixed to each message, e.g. {} or 'none' (default: %(default)s).".format(
            ", ".join(CHAT_MODES)
        ),
    )

    parser.add_argument(
        "--no-numbering",
        action="store_true",
        help="Do not append (i/n) markers when the text needs several messages.",
    )

    parser.add_argument(
        "--output",
        default=None,
        help="Write messages to this file instead of stdout.",
    )

    parser.add_argument(
        "--draft",
        default=None,
        help="Save input and output as a draft file at this path.",
    )

    parser.add_argument(
        "--from-draft",
        action="store_true",
        help="Read the input text from the draft file (--draft or STUTTER_DRAFT_FILE).",
    )

    parser.add_argument(
        "--save-settings",
        default=None,
        help="Write the resolved settings (after overrides) to this JSON file.",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser


def run(args: argparse.Namespace) -> List[str]:
    """Run one transform and return the chat messages.

    Raises:
        ValueError: Bad settings, environment values or oversized input.
        OSError: Unreadable input or unwritable output paths.
    """
    text = _read_input(args)
    if len(text) > MAX_TEXT_CHARS:
        raise ValueError(
            "Input is {} characters; the limit is {}.".format(len(text), MAX_TEXT_CHARS)
        )
    text = text.strip()

    settings = _resolve_settings(args)
    max_chars = args.max_chars if args.max_chars is not None else load_max_chat_chars()
    if max_chars < 1:
        raise ValueError("--max-chars must be at least 1, got {}.".format(max_chars))

    output = transform(text, settings) or ""

    header = normalize_chat_mode(args.chat_mode)
    messages = build_chat_messages(
        output, max_chars, header, numbered=not args.no_numbering
    )

    if args.draft and not args.from_draft:
        path = save_draft(Draft(input_text=text, output_text=output), args.draft)
        _status("Saved draft to {}".format(path))

    if args.save_settings:
        path = save_settings(settings, args.save_settings)
        _status("Saved settings to {}".format(path))

    return messages


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m stutter_writer``.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        messages = run(args)
    except (ValueError, OSError) as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)

    content = MESSAGE_SEPARATOR.join(messages)
    if args.output:
        Path(args.output).write_text(content + "\n", encoding="utf-8")
        _status("Wrote {} message(s) to {}".format(len(messages), args.output))
    else:
        if content:
            print(content)
        _status("{} message(s)".format(len(messages)))


if __name__ == "__main__":
    main()
