"""
Runtime settings read from the environment (and a local .env file).

Variables:
 - SNAKE_CANVAS_SIZE: canvas edge in pixels (default 400)
 - SNAKE_CELL_SIZE: grid cell edge in pixels (default 20)
 - SNAKE_WALL_MODE: start with solid walls (default false)
 - SNAKE_DB_PATH: SQLite file for the high score (see database.py)
 - CORS_ALLOWED_ORIGINS: comma-separated origins for the API
 - LOG_LEVEL: logging level name (default INFO)
"""

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

from domain.constants import DEFAULT_CANVAS_SIZE, DEFAULT_CELL_SIZE

load_dotenv()

DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


@dataclass
class Settings:
    canvas_size: int = DEFAULT_CANVAS_SIZE
    cell_size: int = DEFAULT_CELL_SIZE
    wall_mode: bool = False
    log_level: str = "INFO"
    allowed_origins: List[str] = field(default_factory=lambda: list(DEFAULT_ALLOWED_ORIGINS))

    @property
    def tile_count(self) -> int:
        return self.canvas_size // self.cell_size


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def load_settings() -> Settings:
    """Build Settings from the current environment."""
    canvas_size = _int_env("SNAKE_CANVAS_SIZE", DEFAULT_CANVAS_SIZE)
    cell_size = _int_env("SNAKE_CELL_SIZE", DEFAULT_CELL_SIZE)
    if cell_size > canvas_size:
        raise ValueError(
            f"SNAKE_CELL_SIZE ({cell_size}) cannot exceed SNAKE_CANVAS_SIZE ({canvas_size})"
        )

    origins_env = os.getenv("CORS_ALLOWED_ORIGINS")
    if origins_env:
        origins = [o.strip() for o in origins_env.split(",") if o.strip()]
    else:
        origins = list(DEFAULT_ALLOWED_ORIGINS)

    return Settings(
        canvas_size=canvas_size,
        cell_size=cell_size,
        wall_mode=_bool_env("SNAKE_WALL_MODE", False),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        allowed_origins=origins,
    )
