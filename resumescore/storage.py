import json
from pathlib import Path
from typing import Any


def load_json(path: Path) -> Any:
    """Read a JSON document. Raises ValueError on malformed content."""
    with path.open("r", encoding="utf-8") as f:
        content = f.read().strip()
    if not content:
        raise ValueError(f"Empty JSON file: {path}")
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e


def load_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="ignore")


def dump_report(report: Any) -> str:
    return json.dumps(report, indent=2, ensure_ascii=False)


def save_report(path: Path, report: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(report, f, indent=2, ensure_ascii=False)
