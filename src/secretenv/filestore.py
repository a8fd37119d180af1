"""Reading and writing of .env-style key/value files."""

import logging
from pathlib import Path

from secretenv.errors import EnvFileIOError

logger = logging.getLogger(__name__)

EnvMap = dict[str, str]


def parse_line(line: str) -> tuple[str, str]:
    """Split a data line on its first ``=``.

    A line without ``=`` yields the whole line as key and an empty value.
    Nothing is trimmed or unquoted.
    """
    key, _, value = line.partition("=")
    return key, value


def split_lines(text: str) -> list[str]:
    r"""Split file content on ``\n`` only, dropping one trailing ``\r`` per line.

    Other control or separator characters stay inside the value.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def load(path: Path | str) -> EnvMap:
    """Load an env file into a mapping, creating the file if it is missing.

    Lines starting with ``#`` are skipped. Later lines overwrite earlier ones
    for the same key.

    Args:
        path (Path | str): The env file to read.

    Returns:
        env (EnvMap): The parsed key/value pairs.
    """
    path = Path(path)
    try:
        if not path.exists():
            logger.info("Env file %s does not exist, creating it.", path)
            path.touch()
        with open(path, encoding="utf-8", newline="") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise EnvFileIOError(path, f"could not read env file ({e})") from e

    env: EnvMap = {}
    for line in split_lines(text):
        if line.startswith("#"):
            continue
        key, value = parse_line(line)
        env[key] = value
    logger.debug("Loaded %d entries from %s", len(env), path)
    return env


def format_line(key: str, value: str) -> str:
    """Format a single ``KEY=VALUE`` line.

    Values that look like absolute paths are left bare, everything else is
    wrapped in double quotes. Embedded quotes and newlines are not escaped.
    Used by ``serialize`` for every non-empty key.
    """
    if value.startswith("/"):
        return f"{key}={value}"
    return f'{key}="{value}"'


def serialize(env: EnvMap) -> list[str]:
    """Serialize a mapping into env file lines, dropping empty keys."""
    return [format_line(key, value) for key, value in env.items() if key != ""]


def write(path: Path | str, lines: list[str]) -> None:
    """Truncate ``path`` and write each line followed by a newline."""
    path = Path(path)
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            for line in lines:
                f.write(line + "\n")
            f.flush()
    except OSError as e:
        raise EnvFileIOError(path, f"could not write env file ({e})") from e
    logger.debug("Wrote %d lines to %s", len(lines), path)
