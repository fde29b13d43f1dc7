"""Minimal Markdown helpers shared by the extractor and the rules."""

import re
from collections.abc import Iterator

FENCE_PATTERN = re.compile(r"^ {0,3}(`{3,}|~{3,})")
HEADING_PATTERN = re.compile(r"^ {0,3}#{1,6}[ \t]+\S")


def iter_prose_lines(body: str) -> Iterator[tuple[int, str]]:
    """Yield (0-based index, line) for lines outside fenced code blocks.

    A fence closes only on a run of the same character at least as long as the
    one that opened it. An unclosed fence swallows the rest of the body.
    """
    open_fence: str | None = None
    for idx, line in enumerate(body.splitlines()):
        match = FENCE_PATTERN.match(line)
        if open_fence is None:
            if match:
                open_fence = match.group(1)
                continue
            yield idx, line
        elif (
            match
            and match.group(1)[0] == open_fence[0]
            and len(match.group(1)) >= len(open_fence)
            and not line[match.end() :].strip()
        ):
            open_fence = None


def has_heading(body: str) -> bool:
    """Check for at least one ATX heading (``# Title``) outside code fences."""
    return any(HEADING_PATTERN.match(line) for _, line in iter_prose_lines(body))
