from __future__ import annotations

import random
import string
from pathlib import Path

import pytest

from envsender.errors import ReadError
from envsender.parser import parse_line, parse_text, read_env_file


def test_parse_text_skips_comments_and_blank_lines() -> None:
    content = "# header\n\nKEY1=value1\n   \n  # indented comment\nKEY2=value2\n\n#KEY4=hidden\nKEY3=value3"
    variables = parse_text(content)
    assert variables == {"KEY1": "value1", "KEY2": "value2", "KEY3": "value3"}


def test_parse_text_last_duplicate_wins() -> None:
    assert parse_text("K=1\nOTHER=x\nK=2\n") == {"K": "2", "OTHER": "x"}


def test_malformed_line_is_ignored() -> None:
    assert parse_text("hello world\nKEY=value\n") == {"KEY": "value"}


def test_split_on_first_equals_only() -> None:
    variables = parse_text("DATABASE_URL=postgres://u:p@host/db?sslmode=require&x=1\n")
    assert variables["DATABASE_URL"] == "postgres://u:p@host/db?sslmode=require&x=1"


def test_keys_and_values_are_trimmed() -> None:
    assert parse_text("  SPACED   =   padded value  \r\n") == {"SPACED": "padded value"}


def test_empty_key_is_dropped_and_empty_value_kept() -> None:
    assert parse_text("=orphan\n  = also orphan\nEMPTY=\n") == {"EMPTY": ""}


def test_no_quote_or_escape_handling() -> None:
    assert parse_text("QUOTED=\"a b\"\nESCAPED=line\\nbreak\n") == {
        "QUOTED": "\"a b\"",
        "ESCAPED": "line\\nbreak",
    }


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("", None),
        ("# KEY=value", None),
        ("no delimiter", None),
        ("=value", None),
        ("KEY=value", ("KEY", "value")),
        ("KEY = a=b", ("KEY", "a=b")),
    ],
)
def test_parse_line_outcomes(line: str, expected: tuple[str, str] | None) -> None:
    assert parse_line(line) == expected


def test_read_env_file(tmp_path: Path) -> None:
    path = tmp_path / "app.env"
    path.write_text("KEY1=value1\nKEY2=value2\n# Comment\n\nKEY3=value3", encoding="utf-8")
    assert read_env_file(path) == {"KEY1": "value1", "KEY2": "value2", "KEY3": "value3"}


def test_read_env_file_missing_path(tmp_path: Path) -> None:
    with pytest.raises(ReadError) as exc_info:
        read_env_file(tmp_path / "missing.cfg")
    assert "does not exist" in str(exc_info.value)


def test_read_env_file_rejects_invalid_utf8(tmp_path: Path) -> None:
    path = tmp_path / "binary.env"
    path.write_bytes(b"KEY=\xff\xfe\xfd\n")
    with pytest.raises(ReadError):
        read_env_file(path)


def test_read_env_file_rejects_directory(tmp_path: Path) -> None:
    with pytest.raises(ReadError):
        read_env_file(tmp_path)


def _rand_token(rng: random.Random, alphabet: str, n: int) -> str:
    return "".join(rng.choice(alphabet) for _ in range(n))


def test_shuffled_lines_yield_exactly_the_assignments() -> None:
    rng = random.Random(20261019)
    value_alphabet = string.ascii_letters + string.digits + "=:/.-_ #\"'"
    for _ in range(50):
        count = rng.randint(0, 25)
        expected: dict[str, str] = {}
        lines: list[str] = []
        for index in range(count):
            key = f"K{index}_{_rand_token(rng, string.ascii_uppercase, rng.randint(1, 8))}"
            value = _rand_token(rng, value_alphabet, rng.randint(0, 30)).strip()
            expected[key] = value
            pad = " " * rng.randint(0, 3)
            lines.append(f"{pad}{key}{pad}={pad}{value}{pad}")
        for _ in range(rng.randint(0, 15)):
            lines.append(rng.choice(["", "   ", "\t"]))
        for _ in range(rng.randint(0, 15)):
            lines.append(" " * rng.randint(0, 3) + "#" + _rand_token(rng, value_alphabet, rng.randint(0, 20)))
        for _ in range(rng.randint(0, 10)):
            lines.append(_rand_token(rng, string.ascii_letters + " ", rng.randint(1, 20)))
        rng.shuffle(lines)

        variables = parse_text("\n".join(lines))

        assert len(variables) == count
        assert variables == expected
