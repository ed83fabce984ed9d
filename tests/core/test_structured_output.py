"""
Test suite for tolerant model-output decoding.

System role: Verification of fence stripping and typed parse failures
"""

import pytest

from draftsmith.core.agentic_system.structured_output import parse_json_object, strip_fences
from draftsmith.core.exceptions import ParseError


class TestStripFences:
    @pytest.mark.parametrize(
        "raw",
        [
            "```latex\n\\documentclass{article}\n```",
            "```\n\\documentclass{article}\n```",
            "  ```tex\n\\documentclass{article}```  ",
            "\\documentclass{article}",
        ],
    )
    def test_removes_known_fences(self, raw: str) -> None:
        assert strip_fences(raw) == "\\documentclass{article}"

    def test_inner_backticks_are_kept(self) -> None:
        assert strip_fences("use `code` here") == "use `code` here"


class TestParseJsonObject:
    def test_fenced_json(self) -> None:
        assert parse_json_object('```json\n{"content": "x", "summary": "y"}\n```') == {
            "content": "x",
            "summary": "y",
        }

    def test_json_surrounded_by_prose(self) -> None:
        raw = 'Here is the result:\n{"content": "x"}\nLet me know!'

        assert parse_json_object(raw) == {"content": "x"}

    @pytest.mark.parametrize("raw", ["", "no json here", "{broken", '["a", "b"]', "{\"a\": }"])
    def test_undecodable_output_raises_parse_error(self, raw: str) -> None:
        """Test failures are typed ParseError, never JSONDecodeError."""
        with pytest.raises(ParseError) as exc_info:
            parse_json_object(raw)
        assert exc_info.value.raw_output == raw
