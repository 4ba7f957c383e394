"""
rawcall - parse script statements into calls.

A call is a name plus a flat argument list: say(2), endtext,
createcrewman,0,0,red,0,followplayer. Interpreting the calls is left
to the caller.
"""

from .parser import ParserError, RawCall, parse, parse_call
from .script import ScriptLine, iter_calls, load_script, parse_script

__all__ = [
    "ParserError",
    "RawCall",
    "parse",
    "parse_call",
    "ScriptLine",
    "iter_calls",
    "load_script",
    "parse_script",
]
