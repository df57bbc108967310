"""
Helpers for the application's .env file.
"""

from enum import Enum
from pathlib import Path

from participant_tracker.config import app_root
from participant_tracker.util.log import Logger, get_logger

ENV_FILENAME = ".env"
TOKEN_KEY = "GITHUB_TOKEN"


class TokenUpdate(Enum):
    """Outcome of update_env_token."""

    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    APPENDED = "appended"


def default_env_path() -> Path:
    """Return the env file location in the application root."""
    return app_root() / ENV_FILENAME


def update_env_token(
    token: str,
    env_path: str | Path | None = None,
    *,
    key: str = TOKEN_KEY,
    logger: Logger | None = None,
) -> TokenUpdate:
    """
    Insert or update the ``KEY=token`` line in an env file.

    - Missing or unreadable file: created with the single line ``KEY=token``.
    - Key line with a different value: replaced in place; any later key lines
      are dropped so the key appears once.
    - Key line with the same value: file left untouched.
    - Key absent: the line is appended.

    CRLF line endings and bytes that are not valid UTF-8 are kept as they are.

    Args:
        token: Token value, written as-is (no quoting)
        env_path: Env file (default: .env in the application root)
        key: Variable name (default: GITHUB_TOKEN)
        logger: Logger for progress messages (default: process-wide logger)

    Returns:
        What was done to the file

    Raises:
        OSError: If the file cannot be written
    """
    env_file = Path(env_path) if env_path is not None else default_env_path()
    logger = logger or get_logger()
    prefix = f"{key}="
    token_line = f"{prefix}{token}"

    try:
        with open(env_file, encoding="utf-8", errors="surrogateescape", newline="") as f:
            content = f.read()
    except OSError:
        _write(env_file, f"{token_line}\n")
        logger.info(f"{env_file.name} 파일이 생성되고 토큰이 저장되었습니다.")
        return TokenUpdate.CREATED

    new_lines = []
    has_key = False
    token_updated = False
    for line in content.split("\n"):
        if not line.startswith(prefix):
            new_lines.append(line)
            continue

        value = line[len(prefix):]
        eol = "\r" if value.endswith("\r") else ""
        if value[: len(value) - len(eol)] == token:
            logger.info(f"{env_file.name} 파일에 이미 동일한 토큰이 등록되어 있습니다.")
        else:
            token_updated = True

        # Later key lines are dropped; they only survive if nothing is written.
        if not has_key:
            has_key = True
            new_lines.append(f"{token_line}{eol}")

    if not has_key:
        newline = "\r\n" if "\r\n" in content else "\n"
        separator = "" if not content or content.endswith("\n") else newline
        _write(env_file, f"{content}{separator}{token_line}{newline}")
        logger.info(f"{env_file.name} 파일에 토큰이 저장되었습니다.")
        return TokenUpdate.APPENDED

    if token_updated:
        _write(env_file, "\n".join(new_lines))
        logger.info(f"{env_file.name} 파일의 토큰이 업데이트되었습니다.")
        return TokenUpdate.UPDATED

    return TokenUpdate.UNCHANGED


def _write(env_file: Path, content: str) -> None:
    env_file.parent.mkdir(parents=True, exist_ok=True)
    with open(env_file, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
        f.write(content)
