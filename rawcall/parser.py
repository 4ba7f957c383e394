r"""
Raw Call Parser

Minimal parser for script calls: name, name(arg), name,arg,arg

Creates a flat structure:
- RawCall(name, (args))

The three delimiters , ( ) are interchangeable separators, not brackets.
Every separator opens one argument slot, so say(2) has two arguments:
"2" and the empty slot after the closing paren.

CallParser walks the text with a position and never copies the unconsumed
input. The module-level primitives wrap it: each takes text and returns
either (remaining, value) or None when it does not match.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, TypeVar
import re


# === Configuration ===

SEPARATORS = ",()"          # Argument separators, all equivalent
HORIZONTAL_SPACE = " \t"    # Whitespace allowed around a separator
SNIPPET_CONTEXT = 20        # Characters shown either side of an error position

_ARGUMENT_PATTERN = re.compile(f"[^{re.escape(SEPARATORS)}]+")
_CALL_NAME_PATTERN = re.compile(r"[A-Za-z0-9]+")

T = TypeVar("T")

# (remaining input, parsed value), or None when nothing matched
Match = Optional[Tuple[str, T]]


# === Error Classes ===

class ParserError(ValueError):
    """Raised when text is not a call, with a readable message"""
    def __init__(self, message: str, position: int = None, command_snippet: str = None):
        self.position = position
        self.command_snippet = command_snippet

        full_message = message
        if position is not None:
            full_message += f" (at position {position})"
        if command_snippet:
            full_message += f"\n  Near: {command_snippet}"

        super().__init__(full_message)


# === Result Class ===

@dataclass(frozen=True)
class RawCall:
    """Parsed call: name followed by zero or more arguments"""
    name: str  # ASCII letters and digits only
    args: Tuple[str, ...] = ()  # One per separator, may be ""

    def __post_init__(self):
        # Any sequence is accepted, stored as a tuple
        object.__setattr__(self, "args", tuple(self.args))

    def __repr__(self):
        return f'RawCall({self.name}, {self.args})'

    def to_dict(self) -> dict:
        """Serialize to JSON"""
        return {
            "name": self.name,
            "args": list(self.args)
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'RawCall':
        """Deserialize from JSON"""
        return cls(
            name=data["name"],
            args=tuple(data["args"])
        )


# === Parser ===

class CallParser:
    """
    Cursor over a call's text.

    Each method matches at self.pos and advances past what it consumed.
    A method that does not match returns None and leaves self.pos where
    it was.
    """

    def __init__(self, text: str, pos: int = 0):
        self.text = text
        self.pos = pos
        self.length = len(text)

    def remaining(self) -> str:
        """Unconsumed text"""
        return self.text[self.pos:]

    def skip_space(self):
        """Skip spaces and tabs, never newlines"""
        while self.pos < self.length and self.text[self.pos] in HORIZONTAL_SPACE:
            self.pos += 1

    def sep(self) -> Optional[str]:
        """Match a single , ( or )"""
        if self.pos < self.length and self.text[self.pos] in SEPARATORS:
            token = self.text[self.pos]
            self.pos += 1
            return token
        return None

    def sep_spaced(self) -> Optional[str]:
        """Match a separator with optional spaces/tabs on either side"""
        start = self.pos
        self.skip_space()
        token = self.sep()
        if token is None:
            self.pos = start
            return None
        self.skip_space()
        return token

    def argument(self) -> Optional[str]:
        """Match the longest non-empty run of non-separator characters.

        An empty run is a failure; argument_maybe turns it into "".
        """
        matched = _ARGUMENT_PATTERN.match(self.text, self.pos)
        if matched is None:
            return None
        self.pos = matched.end()
        return matched.group()

    def argument_spaced(self) -> Optional[str]:
        """argument() with surrounding whitespace stripped from the value"""
        value = self.argument()
        if value is None:
            return None
        return value.strip()

    def argument_maybe(self) -> str:
        """argument_spaced() that yields "" instead of failing"""
        value = self.argument_spaced()
        if value is None:
            return ""
        return value

    def sep_argument(self) -> Optional[str]:
        """One separator followed by one (possibly empty) argument.

        Fails only when no separator is present. The separator itself is dropped.
        """
        if self.sep_spaced() is None:
            return None
        return self.argument_maybe()

    def arguments(self) -> List[str]:
        """Zero or more sep_argument() matches"""
        args = []
        while True:
            value = self.sep_argument()
            if value is None:
                break
            args.append(value)
        return args

    def call_name(self) -> Optional[str]:
        """Match a non-empty run of ASCII letters and digits"""
        matched = _CALL_NAME_PATTERN.match(self.text, self.pos)
        if matched is None:
            return None
        self.pos = matched.end()
        return matched.group()

    def call(self) -> Optional[RawCall]:
        """Match a call name followed by its argument list.

        Text after the last argument that does not start with a separator
        is left unconsumed.
        """
        name = self.call_name()
        if name is None:
            return None
        return RawCall(name=name, args=tuple(self.arguments()))


def _run(method: Callable[[CallParser], Optional[T]], text: str) -> Match[T]:
    """Apply one CallParser method to text, slicing the remainder once"""
    parser = CallParser(text)
    value = method(parser)
    if value is None:
        return None
    return parser.remaining(), value


# === Primitives ===

def sep(text: str) -> Match[str]:
    """Match a single , ( or )"""
    return _run(CallParser.sep, text)


def sep_spaced(text: str) -> Match[str]:
    """Match a separator with optional spaces/tabs on either side"""
    return _run(CallParser.sep_spaced, text)


def argument(text: str) -> Match[str]:
    """Match the longest non-empty run of non-separator characters"""
    return _run(CallParser.argument, text)


def argument_spaced(text: str) -> Match[str]:
    """argument() with the value stripped"""
    return _run(CallParser.argument_spaced, text)


def argument_maybe(text: str) -> Match[str]:
    """Optional argument. Always matches, "" when absent."""
    return _run(CallParser.argument_maybe, text)


def sep_argument(text: str) -> Match[str]:
    """Separator then optional argument"""
    return _run(CallParser.sep_argument, text)


def arguments(text: str) -> Match[List[str]]:
    """Zero or more separator+argument pairs. Always matches."""
    return _run(CallParser.arguments, text)


def call_name(text: str) -> Match[str]:
    """Match a non-empty run of ASCII letters and digits"""
    return _run(CallParser.call_name, text)


def call(text: str) -> Match[RawCall]:
    """Match a call name followed by its argument list"""
    return _run(CallParser.call, text)


# === Entry Points ===

def get_snippet(text: str, position: int, context: int = SNIPPET_CONTEXT) -> str:
    """Get a snippet of text around a position for error messages"""
    start = max(0, position - context)
    end = min(len(text), position + context)
    snippet = text[start:end]

    if start > 0:
        snippet = "..." + snippet
    if end < len(text):
        snippet = snippet + "..."

    return snippet


def parse_call(text: str) -> Tuple[str, RawCall]:
    """
    Parse a call from the start of text.

    Args:
        text: Script statement, e.g. "say(2)"

    Returns:
        (remaining, RawCall) - remaining is whatever was not consumed

    Raises:
        ParserError: text does not start with a call name

    Example:
        >>> parse_call("say(2)")
        ('', RawCall(say, ('2', '')))
    """
    matched = call(text)
    if matched is None:
        raise ParserError(
            "Calls must start with a name made of letters and digits",
            position=0,
            command_snippet=get_snippet(text, 0)
        )
    return matched


def parse(text: str) -> RawCall:
    """
    Parse text that must consist of exactly one call.

    Raises:
        ParserError: text is not a call, or text is left over after it
    """
    remaining, result = parse_call(text)
    if remaining:
        position = len(text) - len(remaining)
        raise ParserError(
            f"Unexpected text after call '{result.name}'",
            position=position,
            command_snippet=get_snippet(text, position)
        )
    return result
