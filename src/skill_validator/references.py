"""Extraction of companion-file references from a skill body.

Missing a reference only means one check fewer, while reporting a URL as a
missing local file fails a valid skill. Matching therefore stays conservative:
anything with a URL scheme, an absolute path, or inside fenced code is ignored,
and bare mentions must look like a document path.
"""

import re
from urllib.parse import unquote

from skill_validator.markdown import iter_prose_lines

# [text](target), ![alt](target), optionally <target> and "title".
# Targets may hold one level of balanced parentheses: foo(1).md
LINK_PATTERN = re.compile(
    r"!?\[[^\]]*\]\(\s*(<[^>]*>|(?:[^()\s]|\([^()\s]*\))+)"
    r"(?:\s+(?:\"[^\"]*\"|'[^']*'))?\s*\)"
)

# "see references/guide.md", "refer to `examples.md`"
BARE_PATTERN = re.compile(
    r"\b(?:see|refer\s+to)\s+`?((?:\.{1,2}/)?[\w-][\w.-]*(?:/[\w.-]+)*\.([A-Za-z0-9]+))`?",
    re.IGNORECASE,
)

INLINE_CODE_PATTERN = re.compile(r"(`+)(.+?)\1")
SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")
# docs.spring.io/spring-boot/index.html: a host, not a package path
HOSTNAME_PATTERN = re.compile(r"^[\w-]+(?:\.[\w-]+)+/")

# Extensions accepted for bare mentions, which have no link syntax to vouch for them
DOCUMENT_EXTENSIONS = {
    "md",
    "markdown",
    "txt",
    "rst",
    "json",
    "yaml",
    "yml",
    "toml",
    "xml",
    "properties",
    "csv",
    "sql",
    "py",
    "sh",
    "java",
    "kt",
    "kts",
    "gradle",
    "js",
    "ts",
    "html",
}


def normalize_target(target: str) -> str | None:
    """Turn a link target into a package-relative path, or None to skip it."""
    target = target.strip()
    if target.startswith("<") and target.endswith(">"):
        target = target[1:-1].strip()

    if not target or "://" in target:
        return None
    if target.startswith(("#", "/", "\\")) or SCHEME_PATTERN.match(target):
        return None

    target = target.split("#", 1)[0].split("?", 1)[0]
    target = unquote(target)
    while target.startswith("./"):
        target = target[2:]

    return target or None


def _mask_inline_code(line: str) -> str:
    """Blank out inline code spans while keeping character positions."""
    return INLINE_CODE_PATTERN.sub(lambda m: " " * len(m.group(0)), line)


def extract_references(body: str) -> list[str]:
    """Find relative file paths the body points at.

    Args:
        body: Markdown body of a SKILL.md file.

    Returns:
        Distinct relative paths in order of first appearance.
    """
    references: list[str] = []
    seen: set[str] = set()

    for _, line in iter_prose_lines(body):
        found: list[tuple[int, str]] = []

        for match in LINK_PATTERN.finditer(_mask_inline_code(line)):
            target = normalize_target(match.group(1))
            if target:
                found.append((match.start(), target))

        for match in BARE_PATTERN.finditer(line):
            if match.group(2).lower() not in DOCUMENT_EXTENSIONS:
                continue
            if HOSTNAME_PATTERN.match(match.group(1)):
                continue
            target = normalize_target(match.group(1))
            if target:
                found.append((match.start(1), target))

        for _, target in sorted(found, key=lambda item: item[0]):
            if target not in seen:
                seen.add(target)
                references.append(target)

    return references
