"""Reading and writing the ``tags:`` line of a note's YAML front matter.

A tag block is only recognized at the very top of a note (leading
whitespace is skipped):

    ---
    tags: work projects/alpha
    ---            (or "...")

Other front-matter lines are kept verbatim but never interpreted. The
lexer runs in two stages: a line scan that locates the opening marker,
the ``tags:`` line and the closing marker, then a token split of the tag
list. Nothing here raises for any input text.
"""

import logging
from collections.abc import Iterable, Iterator

from tagvault.core.types import BlockState, TagBlock, TagSettings

logger = logging.getLogger(__name__)

OPEN_MARKER = "---"
CLOSE_MARKERS = ("---", "...")
TAGS_KEY = "tags:"


def _iter_lines(text: str, start: int) -> Iterator[tuple[int, int, int]]:
    """Yield (line_start, content_end, next_line_start) from ``start``.

    content_end excludes the line break, including a trailing ``\\r``.
    """
    pos = start
    length = len(text)
    while pos < length:
        newline = text.find("\n", pos)
        line_end = length if newline == -1 else newline
        next_pos = length if newline == -1 else newline + 1
        content_end = line_end
        if content_end > pos and text[content_end - 1] == "\r":
            content_end -= 1
        yield pos, content_end, next_pos
        pos = next_pos


def split_tokens(raw: str) -> tuple[str, ...]:
    """Split a raw tag list into unique tokens, first occurrence wins."""
    return tuple(dict.fromkeys(raw.split()))


class TagBlockCodec:
    """Decodes and re-encodes the tag block at the top of a note."""

    def __init__(self, settings: TagSettings | None = None):
        self.settings = settings or TagSettings()

    def scan(self, text: str) -> TagBlock:
        """Describe the leading front-matter block of ``text``."""
        start = len(text) - len(text.lstrip())
        lines = _iter_lines(text, start)

        first = next(lines, None)
        if first is None or text[first[0] : first[1]] != OPEN_MARKER:
            return TagBlock(state=BlockState.ABSENT)
        insert_at = first[2]

        tag_line: tuple[int, int] | None = None
        for line_start, content_end, _ in lines:
            content = text[line_start:content_end]
            if content in CLOSE_MARKERS:
                if tag_line is None:
                    return TagBlock(
                        state=BlockState.MALFORMED,
                        insert_at=insert_at,
                        closer=content,
                    )
                tags_start, tags_end = tag_line
                return TagBlock(
                    state=BlockState.PRESENT,
                    tokens=split_tokens(
                        text[tags_start + len(TAGS_KEY) : tags_end]
                    ),
                    tags_start=tags_start,
                    tags_end=tags_end,
                    insert_at=insert_at,
                    closer=content,
                )
            if tag_line is None and content.startswith(TAGS_KEY):
                tag_line = (line_start, content_end)

        # Opening marker without a closing one is just a horizontal rule
        return TagBlock(state=BlockState.ABSENT)

    def decode(self, text: str) -> TagBlock | None:
        """Return the tag block, or None if the note has no well-formed one."""
        block = self.scan(text)
        if block.state is not BlockState.PRESENT:
            return None
        return block

    def tokens(self, text: str) -> list[str]:
        """Tokens of the tag block, empty when there is none."""
        block = self.decode(text)
        return list(block.tokens) if block else []

    @staticmethod
    def format_tag_line(tokens: Iterable[str]) -> str:
        """Canonical ``tags:`` line: unique tokens, sorted, space-joined."""
        return "tags: " + " ".join(sorted(set(tokens)))

    def encode(self, text: str, tokens: Iterable[str]) -> str:
        """Write ``tokens`` into the tag block of ``text``.

        The write strategy follows the detected block state:
        ABSENT prepends a new block, MALFORMED inserts a ``tags:`` line
        right after the opening marker, PRESENT replaces the ``tags:`` line.
        """
        block = self.scan(text)
        tag_line = self.format_tag_line(tokens)

        if block.state is BlockState.PRESENT:
            return text[: block.tags_start] + tag_line + text[block.tags_end :]

        if block.state is BlockState.MALFORMED:
            logger.debug("Front matter has no tags line, inserting one")
            head, tail = text[: block.insert_at], text[block.insert_at :]
            return f"{head}{tag_line}\n{tail}"

        logger.debug("No front matter found, prepending a tag block")
        closer = self.settings.closing_marker
        return f"{OPEN_MARKER}\n{tag_line}\n{closer}\n\n{text}"
