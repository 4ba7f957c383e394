"""
Script reader - one call per line.

Feeds the lines of a script to the call parser. Blank lines are skipped,
everything else is stripped and parsed. What to do with a line that is not
a call is up to the caller, unless strict parsing is asked for.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

from rawcall.parser import ParserError, RawCall, call, get_snippet


DEFAULT_ENCODING = "utf-8"


@dataclass(frozen=True)
class ScriptLine:
    """
    One non-blank line of a script.

    - number: 1-based line number in the script
    - text: the line as written, without its line ending
    - call: parsed call, None if the line is not a call
    - remainder: text left after the call (whole stripped line if no call)
    """
    number: int
    text: str
    call: Optional[RawCall]
    remainder: str = ""

    @property
    def ok(self) -> bool:
        """True when the whole line parsed as a call"""
        return self.call is not None and not self.remainder


def parse_script(text: str, strict: bool = False) -> List[ScriptLine]:
    """
    Parse every non-blank line of a script.

    Args:
        text: Script source
        strict: Raise on the first line that is not exactly one call

    Returns:
        ScriptLine per non-blank line, in order

    Raises:
        ParserError: strict is set and a line is not exactly one call
    """
    lines = []

    for number, raw in enumerate(text.splitlines(), start=1):
        stripped = raw.strip()
        if not stripped:
            continue

        matched = call(stripped)
        if matched is None:
            if strict:
                raise ParserError(
                    f"Line {number} is not a call",
                    position=0,
                    command_snippet=get_snippet(stripped, 0)
                )
            lines.append(ScriptLine(number=number, text=raw, call=None, remainder=stripped))
            continue

        remainder, result = matched
        if strict and remainder:
            position = len(stripped) - len(remainder)
            raise ParserError(
                f"Line {number}: unexpected text after call '{result.name}'",
                position=position,
                command_snippet=get_snippet(stripped, position)
            )
        lines.append(ScriptLine(number=number, text=raw, call=result, remainder=remainder))

    return lines


def iter_calls(text: str) -> Iterator[RawCall]:
    """Yield the call of every line that parsed whole.

    Lines that are not calls, or that leave text after the call, are skipped.
    """
    for line in parse_script(text):
        if line.ok:
            yield line.call


def load_script(path: Path, strict: bool = False, encoding: str = DEFAULT_ENCODING) -> List[ScriptLine]:
    """Read a script file and parse it (see parse_script)"""
    with open(path, encoding=encoding) as f:
        return parse_script(f.read(), strict=strict)
