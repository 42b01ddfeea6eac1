"""Runtime settings loaded from YAML."""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


class Settings(BaseModel):
    """Database location and contributor directory backend."""

    db_path: Path = Field(default=Path("five_for_the_future.db"))
    blog_id: int = Field(default=1, ge=1, description="Blog ID used to prefix non-global cache keys")

    directory_backend: str = Field(default="sqlite", description="sqlite | rest")
    directory_url: Optional[str] = Field(
        default=None,
        description="Site root for the rest backend, e.g. https://wordpress.org/five-for-the-future",
    )
    directory_timeout: float = 30.0

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from YAML. Supports a nested `directory` block or flat directory_* keys."""
        data = yaml.safe_load(Path(path).read_text()) or {}
        directory = data.get("directory", {}) or {}
        flat: dict = {}

        def _get(key: str, nested_key: str):
            if nested_key in directory:
                return directory[nested_key]
            return data.get(key)

        for key in ("db_path", "blog_id"):
            if data.get(key) is not None:
                flat[key] = data[key]
        for key, nested_key in (
            ("directory_backend", "backend"),
            ("directory_url", "base_url"),
            ("directory_timeout", "timeout"),
        ):
            value = _get(key, nested_key)
            if value is not None:
                flat[key] = value
        return cls.model_validate(flat)
