from __future__ import annotations

import os
from pathlib import Path


def _parse_line(raw_line: str) -> tuple[str, str] | None:
    line = raw_line.strip()
    if line.startswith("export "):
        line = line[len("export "):].lstrip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    key, value = (part.strip() for part in line.split("=", 1))
    if not key:
        return None
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        value = value[1:-1]
    return key, value


def load_env_file(path: str | os.PathLike[str] = ".env") -> list[str]:
    """Read RELAY_CONFIG, PORT and friends from a dotenv-style file.

    Variables already present in the environment win. Returns the keys that
    were set from the file.
    """
    env_path = Path(path)
    if not env_path.exists():
        return []

    loaded = []
    for raw_line in env_path.read_text().splitlines():
        parsed = _parse_line(raw_line)
        if parsed is None:
            continue
        key, value = parsed
        if key in os.environ:
            continue
        os.environ[key] = value
        loaded.append(key)
    return loaded
