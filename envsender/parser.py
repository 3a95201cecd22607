from __future__ import annotations

import logging
from pathlib import Path

from envsender.errors import ReadError

logger = logging.getLogger("envsender.parser")


def parse_line(line: str) -> tuple[str, str] | None:
    """Return the ``(key, value)`` pair on a line, or ``None`` if it carries none.

    Blank lines, ``#`` comments, lines without ``=`` and lines with an empty
    key all yield ``None``. Only the first ``=`` separates key from value.
    """
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None
    key, sep, value = stripped.partition("=")
    if not sep:
        return None
    key = key.strip()
    if not key:
        return None
    return key, value.strip()


def parse_text(content: str) -> dict[str, str]:
    variables: dict[str, str] = {}
    skipped = 0
    for line in content.splitlines():
        pair = parse_line(line)
        if pair is None:
            stripped = line.strip()
            if stripped and not stripped.startswith("#"):
                skipped += 1
            continue
        key, value = pair
        variables[key] = value
    if skipped:
        logger.debug("ignored %s malformed line(s)", skipped)
    return variables


def read_env_file(path: str | Path) -> dict[str, str]:
    target = Path(path)
    if not target.exists():
        raise ReadError(str(path), "file does not exist")
    try:
        content = target.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ReadError(str(path), "content is not valid UTF-8 text") from exc
    except OSError as exc:
        raise ReadError(str(path), exc.strerror or exc.__class__.__name__) from exc
    variables = parse_text(content)
    logger.debug("found %s variable(s) in %s", len(variables), path)
    return variables
