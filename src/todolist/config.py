"""Configuration model for todolist."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

# Default config directory
TODO_DIR = Path(".todo")
CONFIG_FILE = TODO_DIR / "config.json"
DATA_FILE = TODO_DIR / "tasks.json"


class TodoConfig(BaseModel):
    """Main configuration for todolist."""

    data_file: str = str(DATA_FILE)
    log_level: str = "WARNING"
    log_file: str | None = None

    @classmethod
    def load(cls, path: Path | None = None) -> TodoConfig:
        """Load configuration from file or return defaults."""
        if path is None:
            path = CONFIG_FILE

        if not path.exists():
            return cls()

        return cls.model_validate_json(path.read_text(encoding="utf-8"))

    def save(self, path: Path | None = None) -> None:
        """Write the config as JSON, leaving out unset optional values."""
        path = path or CONFIG_FILE
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2, exclude_none=True) + "\n", encoding="utf-8")

    def resolve_data_file(self, override: str | None = None) -> Path:
        """Return the task file path, preferring an explicit override."""
        return Path(override or self.data_file)
