"""Placeholders of Rust format-string literals."""

import re
from dataclasses import dataclass
from typing import Optional

_RAW_PREFIX = re.compile(r'^r(#*)"')
_NUMERIC_DOLLAR = re.compile(r"(^|[^A-Za-z0-9_])\d+\$")


@dataclass(frozen=True)
class Placeholder:
    """A ``{arg:spec}`` placeholder; offsets index the literal's text."""

    start: int
    end: int
    argument: str
    spec: Optional[str]

    @property
    def implicit(self) -> bool:
        """``{}`` or ``{:spec}``: consumes the next positional argument."""
        return self.argument == ""

    @property
    def indexed(self) -> bool:
        return self.argument.isdigit()

    @property
    def dynamic_spec(self) -> bool:
        """Width or precision taken from another argument (``*`` or ``N$``)."""
        return self.spec is not None and ("*" in self.spec or bool(_NUMERIC_DOLLAR.search(self.spec)))

    def render(self, argument: str) -> str:
        if self.spec is None:
            return "{" + argument + "}"
        return "{" + argument + ":" + self.spec + "}"


@dataclass(frozen=True)
class FormatString:
    literal: str
    placeholders: tuple[Placeholder, ...]

    def embed(self, names: dict[int, str]) -> str:
        """Rewrite the literal, filling placeholder ``i`` with ``names[i]``."""
        out = []
        pos = 0
        for index, placeholder in enumerate(self.placeholders):
            if index not in names:
                continue
            out.append(self.literal[pos:placeholder.start])
            out.append(placeholder.render(names[index]))
            pos = placeholder.end
        out.append(self.literal[pos:])
        return "".join(out)


def _content_bounds(literal: str) -> Optional[tuple[int, int, bool]]:
    raw = _RAW_PREFIX.match(literal)
    if raw:
        hashes = len(raw.group(1))
        return raw.end(), len(literal) - 1 - hashes, True
    if literal.startswith('"') and literal.endswith('"') and len(literal) >= 2:
        return 1, len(literal) - 1, False
    return None


def parse_format_string(literal: str) -> Optional[FormatString]:
    """
    Parse the placeholders of a string literal.

    Returns None for byte strings or malformed format strings (unbalanced
    braces), which callers leave alone.
    """
    bounds = _content_bounds(literal)
    if bounds is None:
        return None
    pos, end, raw = bounds
    placeholders = []
    while pos < end:
        char = literal[pos]
        if char == "\\" and not raw:
            if literal.startswith("u{", pos + 1):
                close = literal.find("}", pos, end)
                pos = end if close == -1 else close + 1
            else:
                pos += 2
            continue
        if char == "{":
            if literal.startswith("{", pos + 1):
                pos += 2
                continue
            close = literal.find("}", pos + 1, end)
            if close == -1:
                return None
            argument, colon, spec = literal[pos + 1:close].partition(":")
            placeholders.append(Placeholder(pos, close + 1, argument.strip(), spec if colon else None))
            pos = close + 1
            continue
        if char == "}":
            if literal.startswith("}", pos + 1):
                pos += 2
                continue
            return None
        pos += 1
    return FormatString(literal, tuple(placeholders))
