"""Pattern compilation and matching.

A pattern is compiled once into one of three frozen variants:

    "/favicon.ico"      -> Exact("/favicon.ico")
    "/images/"          -> Prefix("/images/")
    "/users/:id"        -> Template((Literal(""), Literal("users"), Capture(":id")), ...)
    "/files/user-:id/"  -> Template((..., Capture(":id", prefix="user-")), prefix_form=True)

Flat patterns compare strings; templates compare ``/``-delimited segments.
Nothing here percent-decodes, escapes or validates: a ``:`` anywhere in the
pattern makes it a template, and a ``:`` in the path is just a character.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import TypeAlias

from patmux.routing.captures import Captures

CAPTURE_MARKER = ":"


@dataclass(frozen=True, slots=True)
class Literal:
    """A template segment that must equal the path segment exactly."""

    text: str

    def accepts(self, segment: str) -> bool:
        return segment == self.text


@dataclass(frozen=True, slots=True)
class Capture:
    """A template segment that binds the path segment to ``name``.

    ``prefix`` is the literal text before the marker (``"user-"`` in
    ``user-:id``); the bound value is the path segment past that prefix.
    """

    name: str
    prefix: str = ""

    def accepts(self, segment: str) -> bool:
        return segment.startswith(self.prefix)

    def value(self, segment: str) -> str:
        return segment[len(self.prefix) :]


Segment: TypeAlias = Literal | Capture


@dataclass(frozen=True, slots=True)
class Exact:
    """Flat pattern without a trailing slash: matches one literal path."""

    literal: str

    def matches(self, path: str) -> bool:
        return path == self.literal

    def captures(self, path: str) -> Captures | None:  # noqa: ARG002
        return None


@dataclass(frozen=True, slots=True)
class Prefix:
    """Flat pattern with a trailing slash: matches the subtree under it."""

    literal: str

    def matches(self, path: str) -> bool:
        return len(path) >= len(self.literal) and path.startswith(self.literal)

    def captures(self, path: str) -> Captures | None:  # noqa: ARG002
        return None


@dataclass(frozen=True, slots=True)
class Template:
    """Segmented pattern with at least one capture.

    ``prefix_form`` templates (trailing ``/``) drop their final empty
    segment and accept any number of extra trailing path segments; the
    others require the path to have exactly ``slash_count`` slashes.
    """

    segments: tuple[Segment, ...]
    prefix_form: bool
    slash_count: int

    def matches(self, path: str) -> bool:
        if self.prefix_form:
            parts = path.split("/")
            if len(parts) <= self.slash_count - 1:
                return False
        else:
            if path.count("/") != self.slash_count:
                return False
            parts = path.split("/")
        return all(
            segment.accepts(part) for segment, part in zip(self.segments, parts, strict=False)
        )

    def captures(self, path: str) -> Captures:
        """Bind every capture segment to its path segment.

        Assumes ``matches(path)`` already returned True.
        """
        parts = path.split("/")
        return Captures(
            (segment.name, segment.value(parts[i]))
            for i, segment in enumerate(self.segments)
            if isinstance(segment, Capture)
        )


CompiledPattern: TypeAlias = Exact | Prefix | Template


def parse_segment(text: str) -> Segment:
    """Parse one ``/``-delimited template segment.

    Examples::

        "users"     -> Literal("users")
        ":id"       -> Capture(":id")
        "user-:id"  -> Capture(":id", prefix="user-")
    """
    index = text.find(CAPTURE_MARKER)
    if index == -1:
        return Literal(text)
    return Capture(name=text[index:], prefix=text[:index])


@lru_cache(maxsize=1024)
def compile_pattern(pattern: str) -> CompiledPattern:
    """Compile a non-empty pattern string into its matching variant."""
    if not pattern:
        msg = "Cannot compile an empty pattern."
        raise ValueError(msg)

    prefix_form = pattern.endswith("/")
    if CAPTURE_MARKER not in pattern:
        return Prefix(pattern) if prefix_form else Exact(pattern)

    parts = pattern.split("/")
    if prefix_form:
        # Trailing "/" leaves an empty last segment; it constrains nothing.
        parts = parts[:-1]
    return Template(
        segments=tuple(parse_segment(part) for part in parts),
        prefix_form=prefix_form,
        slash_count=pattern.count("/"),
    )


def matches(pattern: str, path: str) -> bool:
    """Does ``path`` match ``pattern``?

    Examples::

        matches("/hello/", "/hello/whatever")  -> True
        matches("/hello/", "/hello")           -> False
        matches("/:a", "/hello/world")         -> False
        matches("/:a/", "/hello/world")        -> True
    """
    if not pattern:
        return False
    return compile_pattern(pattern).matches(path)


def extract_captures(pattern: str, path: str) -> Captures | None:
    """Return the capture bindings of a matched ``(pattern, path)`` pair.

    Returns ``None`` for patterns without captures. The pair is not
    re-validated; calling this on a non-matching path gives meaningless
    bindings (or ``IndexError`` when the path is too short).
    """
    if not pattern or CAPTURE_MARKER not in pattern:
        return None
    return compile_pattern(pattern).captures(path)
