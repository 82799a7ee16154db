import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from automatic.errors import AutomaticFileError, InvalidNameError


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def is_valid_name(name: str) -> bool:
    """Return True when name is usable as a single path component."""
    if not name or name in (".", ".."):
        return False
    return "/" not in name and "\\" not in name


def ensure_valid_name(name: str, kind: str) -> str:
    if not is_valid_name(name):
        raise InvalidNameError(kind, name)
    return name


def read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def read_json_safe(path: Path) -> tuple[Any | None, str | None]:
    if not path.exists():
        return None, None
    if path.stat().st_size == 0:
        return None, None
    try:
        return read_json(path), None
    except (OSError, ValueError) as exc:
        return None, str(exc)


def dump_json(payload: Any) -> str:
    return json.dumps(payload, indent=2, sort_keys=False) + "\n"


def write_json(path: Path, payload: Any) -> None:
    write_text(path, dump_json(payload))


def write_text(path: Path, content: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise AutomaticFileError(path, f"Failed to write ({exc.strerror or exc})") from exc


def write_text_if_changed(path: Path, content: str) -> bool:
    if path.is_file():
        try:
            if path.read_text(encoding="utf-8") == content:
                return False
        except (OSError, UnicodeDecodeError):
            pass
    write_text(path, content)
    return True


def is_under(path: Path, root: Path) -> bool:
    try:
        path.resolve().relative_to(root.resolve())
        return True
    except ValueError:
        return False


def compact_home_path(path: str | Path, home: Path | None = None) -> str:
    text = str(path)
    home_text = str(home or Path.home())
    if text == home_text:
        return "~"
    home_prefix = f"{home_text}/"
    if text.startswith(home_prefix):
        return f"~/{text[len(home_prefix):]}"
    return text


def unique(items: list[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result
