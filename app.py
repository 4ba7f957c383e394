"""
app.py - rawcall command-line tool

Parses a script file and prints the call found on each line.

Usage:
    python app.py script.txt            # One RawCall per line
    python app.py script.txt --json     # JSON lines
    python app.py script.txt --strict   # Stop at the first bad line
"""

import codecs
import json
import sys
from pathlib import Path

from rawcall.parser import ParserError
from rawcall.script import DEFAULT_ENCODING, ScriptLine, load_script


class App:
    """
    rawcall dump tool.

    Handles:
    - Reading and parsing the script
    - Formatting each line (text or JSON)
    - Reporting errors with an exit status
    """

    def __init__(
        self,
        strict: bool = False,
        as_json: bool = False,
        encoding: str = DEFAULT_ENCODING
    ):
        """
        Initialize the tool.

        Args:
            strict: Abort on the first line that is not exactly one call
            as_json: Print JSON lines instead of text
            encoding: Encoding of script files
        """
        self.strict = strict
        self.as_json = as_json
        self.encoding = encoding

    def format_line(self, line: ScriptLine) -> str:
        """Render one script line for output."""
        if self.as_json:
            data = {"line": line.number, "name": None, "args": None}
            if line.call is not None:
                data.update(line.call.to_dict())
            data["remainder"] = line.remainder
            return json.dumps(data)

        if line.call is None:
            return f"{line.number}: ERROR: not a call: {line.remainder!r}"

        output = f"{line.number}: {line.call!r}"
        if line.remainder:
            output += f" [unparsed: {line.remainder!r}]"
        return output

    def run(self, script: Path) -> int:
        """
        Parse script and print its calls.

        Args:
            script: Path to the script file

        Returns:
            Exit status: 0 if every line is a call, 1 otherwise
        """
        # Validate configuration
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ValueError(f"Unknown encoding '{self.encoding}'") from e

        try:
            lines = load_script(script, strict=self.strict, encoding=self.encoding)
        except OSError as e:
            print(f"ERROR: Failed to read {script}: {e}", file=sys.stderr)
            return 1
        except UnicodeDecodeError as e:
            print(f"ERROR: {script} is not valid {self.encoding}: {e}", file=sys.stderr)
            return 1
        except ParserError as e:
            print(f"ERROR: {script}: {e}", file=sys.stderr)
            return 1

        for line in lines:
            print(self.format_line(line))

        bad = [line for line in lines if not line.ok]
        if bad:
            print(f"WARNING: {len(bad)} of {len(lines)} lines did not parse cleanly", file=sys.stderr)
            return 1
        return 0


def main():
    """Entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Parse a script into calls")
    parser.add_argument(
        "script",
        type=Path,
        help="Script file, one call per line"
    )
    parser.add_argument(
        "--strict", "-s",
        action="store_true",
        help="Stop at the first line that is not exactly one call"
    )
    parser.add_argument(
        "--json", "-j",
        dest="as_json",
        action="store_true",
        help="Print one JSON object per line"
    )
    parser.add_argument(
        "--encoding", "-e",
        default=DEFAULT_ENCODING,
        help=f"Script file encoding (default: {DEFAULT_ENCODING})"
    )
    args = parser.parse_args()

    app = App(
        strict=args.strict,
        as_json=args.as_json,
        encoding=args.encoding
    )

    sys.exit(app.run(args.script))


if __name__ == "__main__":
    main()
