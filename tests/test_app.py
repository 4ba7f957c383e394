"""Tests for app.py - command-line dump tool."""

import json
import sys

import pytest

from app import App, main
from rawcall.parser import RawCall
from rawcall.script import ScriptLine


@pytest.fixture
def write_script(tmp_path):
    """Write a script file and return its path."""
    def _write(content, name="script.txt"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write


class TestAppInitialization:
    """Test App configuration."""

    def test_app_defaults(self):
        """App uses default configuration."""
        app = App()
        assert app.strict is False
        assert app.as_json is False
        assert app.encoding == "utf-8"

    def test_app_custom_config(self):
        """App accepts custom configuration."""
        app = App(strict=True, as_json=True, encoding="latin-1")
        assert app.strict is True
        assert app.as_json is True
        assert app.encoding == "latin-1"

    def test_unknown_encoding(self, write_script):
        """Unknown encoding raises ValueError."""
        path = write_script("endtext\n")
        app = App(encoding="no-such-codec")
        with pytest.raises(ValueError, match="Unknown encoding") as exc_info:
            app.run(path)
        assert isinstance(exc_info.value.__cause__, LookupError)


class TestFormatLine:
    """Test output formatting."""

    def test_text_call(self):
        """Text format shows line number and call."""
        line = ScriptLine(number=3, text="say(2)", call=RawCall("say", ["2", ""]))
        assert App().format_line(line) == "3: RawCall(say, ('2', ''))"

    def test_text_remainder(self):
        """Leftover text is shown as unparsed."""
        line = ScriptLine(number=1, text="say hi", call=RawCall("say", []), remainder=" hi")
        assert App().format_line(line) == "1: RawCall(say, ()) [unparsed: ' hi']"

    def test_text_not_a_call(self):
        """Bad lines are marked as errors."""
        line = ScriptLine(number=2, text="# note", call=None, remainder="# note")
        assert App().format_line(line) == "2: ERROR: not a call: '# note'"

    def test_json_call(self):
        """JSON format carries line, name, args and remainder."""
        line = ScriptLine(number=3, text="say(2)", call=RawCall("say", ["2", ""]))
        data = json.loads(App(as_json=True).format_line(line))
        assert data == {"line": 3, "name": "say", "args": ["2", ""], "remainder": ""}

    def test_json_not_a_call(self):
        """Bad lines have null name and args."""
        line = ScriptLine(number=2, text="# note", call=None, remainder="# note")
        data = json.loads(App(as_json=True).format_line(line))
        assert data == {"line": 2, "name": None, "args": None, "remainder": "# note"}


class TestAppRun:
    """Test App.run end to end."""

    def test_clean_script(self, write_script, capsys):
        """Clean script prints every call and exits 0."""
        path = write_script("say(2)\n\nendtext\n")
        assert App().run(path) == 0

        out, err = capsys.readouterr()
        assert out.splitlines() == [
            "1: RawCall(say, ('2', ''))",
            "3: RawCall(endtext, ())",
        ]
        assert err == ""

    def test_json_output(self, write_script, capsys):
        """JSON mode prints one object per line."""
        path = write_script("createcrewman,0,0, red,0,followplayer\n")
        assert App(as_json=True).run(path) == 0

        out, _ = capsys.readouterr()
        records = [json.loads(line) for line in out.splitlines()]
        assert records == [{
            "line": 1,
            "name": "createcrewman",
            "args": ["0", "0", "red", "0", "followplayer"],
            "remainder": "",
        }]

    def test_bad_lines_reported(self, write_script, capsys):
        """Lenient run prints everything, warns and exits 1."""
        path = write_script("say(1)\n# comment\nsay hello\n")
        assert App().run(path) == 1

        out, err = capsys.readouterr()
        assert out.splitlines() == [
            "1: RawCall(say, ('1', ''))",
            "2: ERROR: not a call: '# comment'",
            "3: RawCall(say, ()) [unparsed: ' hello']",
        ]
        assert "WARNING: 2 of 3 lines did not parse cleanly" in err

    def test_strict_stops(self, write_script, capsys):
        """Strict run prints nothing and reports the bad line."""
        path = write_script("say(1)\n# comment\n")
        assert App(strict=True).run(path) == 1

        out, err = capsys.readouterr()
        assert out == ""
        assert "ERROR:" in err
        assert "Line 2 is not a call" in err

    def test_missing_file(self, tmp_path, capsys):
        """Unreadable file exits 1 with an error."""
        assert App().run(tmp_path / "missing.txt") == 1

        _, err = capsys.readouterr()
        assert "ERROR: Failed to read" in err

    def test_undecodable_file(self, tmp_path, capsys):
        """Bytes that do not decode exit 1 with an error."""
        path = tmp_path / "binary.txt"
        path.write_bytes(b"say(\xff\xfe)\n")
        assert App().run(path) == 1

        _, err = capsys.readouterr()
        assert "is not valid utf-8" in err


class TestMain:
    """Test command-line entry point."""

    def test_main_exit_code(self, write_script, monkeypatch, capsys):
        """main exits with the run status."""
        path = write_script("endtext\n")
        monkeypatch.setattr(sys, "argv", ["rawcall", str(path), "--json"])

        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 0

        out, _ = capsys.readouterr()
        assert json.loads(out) == {"line": 1, "name": "endtext", "args": [], "remainder": ""}

    def test_main_strict_flag(self, write_script, monkeypatch):
        """--strict is passed to the app."""
        path = write_script("say hello\n")
        monkeypatch.setattr(sys, "argv", ["rawcall", str(path), "--strict"])

        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1
