# File: ctrlgen/utils.py
"""
ctrlgen - Naming Utilities
===========================
String transformations used to turn model metadata into consistent names
inside generated code: case conversion, pluralisation, short-name
extraction and import-block rendering.

Performance strategy:
- ALL string-conversion functions are decorated with ``@lru_cache(maxsize=None)``
  so repeated calls across many generated methods are O(1) after the first.
- Every function is pure and never raises; empty input yields empty output.
"""

from __future__ import annotations

import functools
import logging
import re
import time
from typing import Dict, List, Optional, Sequence, Set, Tuple

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("ctrlgen.utils")

# ---------------------------------------------------------------------------
# Pre-compiled regex patterns (compiled once at module load)
# ---------------------------------------------------------------------------

_CAMEL_TO_SNAKE_RE1: re.Pattern[str] = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_TO_SNAKE_RE2: re.Pattern[str] = re.compile(r"([a-z0-9])([A-Z])")
_NON_ALPHANUM_RE: re.Pattern[str] = re.compile(r"[^a-zA-Z0-9]")
_MULTI_UNDERSCORE_RE: re.Pattern[str] = re.compile(r"_{2,}")
_LEADING_TRAILING_UNDERSCORE_RE: re.Pattern[str] = re.compile(r"^_+|_+$")
_SPLIT_WORDS_RE: re.Pattern[str] = re.compile(
    r"[A-Z]?[a-z]+|[A-Z]+(?=[A-Z][a-z]|\d|\b)|[A-Z]|\d+"
)
_PATH_SEGMENT_RE: re.Pattern[str] = re.compile(r"[./\\]")
_STUDLY_SPLIT_RE: re.Pattern[str] = re.compile(r"[\s_\-]+")

# Irregular nouns common in table names
_IRREGULAR_PLURALS: Dict[str, str] = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "mouse": "mice",
    "goose": "geese",
    "tooth": "teeth",
    "foot": "feet",
    "datum": "data",
    "index": "indices",
    "matrix": "matrices",
    "vertex": "vertices",
    "axis": "axes",
    "crisis": "crises",
    "analysis": "analyses",
    "status": "statuses",
    "address": "addresses",
}


# ---------------------------------------------------------------------------
# Cached string transformation functions
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=None)
def to_snake_case(name: str) -> str:
    """
    Convert any string to snake_case.

    Examples:
        >>> to_snake_case("BlogPost")
        'blog_post'
        >>> to_snake_case("getHTTPResponse")
        'get_http_response'
        >>> to_snake_case("already_snake")
        'already_snake'
    """
    if not name:
        return ""
    s: str = _CAMEL_TO_SNAKE_RE1.sub(r"\1_\2", name)
    s = _CAMEL_TO_SNAKE_RE2.sub(r"\1_\2", s)
    s = _NON_ALPHANUM_RE.sub("_", s)
    s = _MULTI_UNDERSCORE_RE.sub("_", s)
    s = _LEADING_TRAILING_UNDERSCORE_RE.sub("", s)
    return s.lower()


@functools.lru_cache(maxsize=None)
def to_title_human(name: str) -> str:
    """
    Convert identifier to human-readable text.

    Examples:
        >>> to_title_human("blog_post")
        'Blog Post'
    """
    if not name:
        return ""
    words: Tuple[str, ...] = _extract_words(name)
    return " ".join(w.capitalize() for w in words)


@functools.lru_cache(maxsize=None)
def lcfirst(name: str) -> str:
    """Lower-case the first character only."""
    if not name:
        return ""
    return name[0].lower() + name[1:]


@functools.lru_cache(maxsize=None)
def ucfirst(name: str) -> str:
    """Upper-case the first character only."""
    if not name:
        return ""
    return name[0].upper() + name[1:]


@functools.lru_cache(maxsize=None)
def to_studly_case(name: str) -> str:
    """
    Upper-case the first letter of every ``_`` / ``-`` / space separated
    word and join them.  Capitals inside a word are kept.

    Examples:
        >>> to_studly_case("blog_posts")
        'BlogPosts'
        >>> to_studly_case("SMSLogs")
        'SMSLogs'
        >>> to_studly_case("user_APIKeys")
        'UserAPIKeys'
    """
    if not name:
        return ""
    return "".join(ucfirst(word) for word in _STUDLY_SPLIT_RE.split(name) if word)


@functools.lru_cache(maxsize=None)
def to_plural(name: str) -> str:
    """
    Naive English pluralisation sufficient for code generation.

    Only the last word of a snake_case name is pluralised, so
    ``blog_post`` becomes ``blog_posts``.
    """
    if not name:
        return ""

    lower: str = name.lower()

    if lower in _IRREGULAR_PLURALS:
        plural: str = _IRREGULAR_PLURALS[lower]
        # Preserve original casing of first char
        if name[0].isupper():
            return plural[0].upper() + plural[1:]
        return plural

    if "_" in name:
        head, _, tail = name.rpartition("_")
        return f"{head}_{to_plural(tail)}"

    # Already plural-looking (very naive)
    if lower.endswith("s") and not lower.endswith(("ss", "us", "is")):
        return name

    # Rules ordered by specificity
    if lower.endswith(("sh", "ch", "x", "z", "ss", "us", "is")):
        return name + "es"
    if lower.endswith("y") and len(name) > 1 and lower[-2] not in "aeiou":
        return name[:-1] + "ies"
    if lower.endswith("fe"):
        return name[:-2] + "ves"
    if lower.endswith("f"):
        return name[:-1] + "ves"
    if lower.endswith("o") and len(name) > 1 and lower[-2] not in "aeiou":
        return name + "es"

    return name + "s"


@functools.lru_cache(maxsize=None)
def short_name(qualified_name: str) -> str:
    """
    Strip every module/namespace segment and lower-case the first letter.

    Examples:
        >>> short_name("app.models.BlogPost")
        'blogPost'
        >>> short_name("App\\\\Models\\\\User")
        'user'
    """
    if not qualified_name:
        return ""
    tail: str = _PATH_SEGMENT_RE.split(qualified_name)[-1]
    return lcfirst(tail)


@functools.lru_cache(maxsize=None)
def _extract_words(name: str) -> Tuple[str, ...]:
    """
    Extract individual words from any casing style.

    Returns a tuple (hashable for LRU cache) of lowercase word strings.
    """
    cleaned: str = _NON_ALPHANUM_RE.sub(" ", name)
    words: List[str] = _SPLIT_WORDS_RE.findall(cleaned)
    return tuple(w.lower() for w in words if w)


# ---------------------------------------------------------------------------
# Indentation helpers
# ---------------------------------------------------------------------------


def indent(text: str, level: int = 1, size: int = 4) -> str:
    """Indent every non-blank line of *text* by *level* x *size* spaces."""
    prefix: str = " " * (level * size)
    lines: List[str] = text.split("\n")
    return "\n".join(prefix + line if line.strip() else line for line in lines)


# ---------------------------------------------------------------------------
# Import statement builder
# ---------------------------------------------------------------------------


def build_import_block(imports: Dict[str, Set[str]]) -> str:
    """
    Build a sorted, de-duplicated import block from a mapping of
    module -> set of names.

    Example:
        >>> build_import_block({"fastapi": {"Request", "Depends"}})
        'from fastapi import Depends, Request'
    """
    lines: List[str] = []
    for module in sorted(imports.keys()):
        names: List[str] = sorted(imports[module])
        if names:
            names_str: str = ", ".join(names)
            lines.append(f"from {module} import {names_str}")
        else:
            lines.append(f"import {module}")
    return "\n".join(lines)


def build_namespace_imports(namespaces: Sequence[str]) -> str:
    """
    Render a list of fully qualified names as an import block.

    The list may contain duplicates; they collapse here.  Names without a
    module part are emitted as bare ``import`` statements.
    """
    grouped: Dict[str, Set[str]] = {}
    for qualified in namespaces:
        module, _, name = qualified.rpartition(".")
        if module:
            grouped.setdefault(module, set()).add(name)
        else:
            grouped.setdefault(name, set())
    return build_import_block(grouped)


# ---------------------------------------------------------------------------
# Timer context manager
# ---------------------------------------------------------------------------


class Timer:
    """
    Simple context-manager timer for profiling generation steps.

    Usage:
        with Timer("generate store") as t:
            ...
        print(t.elapsed)
    """

    __slots__ = ("label", "start_time", "end_time", "elapsed")

    def __init__(self, label: str = "operation") -> None:
        self.label: str = label
        self.start_time: float = 0.0
        self.end_time: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[object],
    ) -> None:
        self.end_time = time.perf_counter()
        self.elapsed = self.end_time - self.start_time
        logger.debug("Timer [%s]: %.4f seconds", self.label, self.elapsed)

    def __repr__(self) -> str:
        return f"<Timer {self.label}: {self.elapsed:.4f}s>"


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "to_snake_case",
    "to_studly_case",
    "to_title_human",
    "lcfirst",
    "ucfirst",
    "to_plural",
    "short_name",
    "indent",
    "build_import_block",
    "build_namespace_imports",
    "Timer",
]

logger.debug("ctrlgen.utils loaded — %d public symbols.", len(__all__))
