"""Gradient configuration loaded from TOML with environment overrides.

The config file location defaults to `~/.config/fluid-gradient/config.toml`
and may be overridden with `FLUID_GRADIENT_CONFIG_PATH` (a file path, or a
directory that holds `config.toml`). `FLUID_GRADIENT_SEED` and
`FLUID_GRADIENT_SPEED` override the corresponding values from the file.
"""

from __future__ import annotations

import logging
import os
import tempfile
from typing import Any
from typing import Callable

import tomli
import tomli_w
from pydantic import BaseModel, Field, field_validator

from fluid_gradient.colors import to_qcolor
from fluid_gradient.scene import GradientScene
from fluid_gradient.scene import create_scene

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "FLUID_GRADIENT_CONFIG_PATH"
SEED_ENV = "FLUID_GRADIENT_SEED"
SPEED_ENV = "FLUID_GRADIENT_SPEED"


class GradientConfig(BaseModel):
    """Scene settings.

    Attributes:
        seed: Random seed; the same seed replays the same animation.
        speed: Animation speed; zero or less keeps the blobs still.
        blobs: Base layer colours, one blob per entry.
        highlights: Highlight layer colours, composited with an overlay blend.
        frame_interval_ms: Timer interval used by the Qt driver.
    """

    seed: int = Field(default=0, ge=0)
    speed: float = 1.0
    blobs: list[str] = Field(default_factory=list)
    highlights: list[str] = Field(default_factory=list)
    frame_interval_ms: int = Field(default=16, ge=1, le=1000)

    @field_validator("blobs", "highlights")
    @classmethod
    def validate_colors(cls, v: list[str]) -> list[str]:
        """Ensure every colour parses."""
        for color in v:
            to_qcolor(color)
        return v

    def create_scene(
        self,
        *,
        clock: Callable[[], float] | None = None,
        is_visible: Callable[[], bool] | None = None,
        aspect_ratio: float = 1.0,
    ) -> GradientScene:
        kwargs: dict[str, Any] = {
            "blobs": self.blobs,
            "highlights": self.highlights,
            "speed": self.speed,
            "is_visible": is_visible,
            "aspect_ratio": aspect_ratio,
        }
        if clock is not None:
            kwargs["clock"] = clock
        return create_scene(self.seed, **kwargs)


def default_config_path() -> str:
    override = str(os.environ.get(CONFIG_PATH_ENV) or "").strip()
    if override:
        override = os.path.expanduser(override)
        if override.lower().endswith(".toml"):
            return override
        return os.path.join(override, "config.toml")
    base = os.path.expanduser("~/.config/fluid-gradient")
    return os.path.join(base, "config.toml")


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    seed = str(os.environ.get(SEED_ENV) or "").strip()
    if seed:
        overrides["seed"] = seed
    speed = str(os.environ.get(SPEED_ENV) or "").strip()
    if speed:
        overrides["speed"] = speed
    return overrides


def load_config(path: str | None = None) -> GradientConfig:
    path = path or default_config_path()
    payload: dict[str, Any] = {}
    if os.path.exists(path):
        with open(path, "rb") as f:
            payload = tomli.load(f)
    else:
        logger.debug("no gradient config at %s; using defaults", path)

    section = payload.get("gradient", payload)
    if not isinstance(section, dict):
        section = {}
    data = dict(section)
    data.update(_env_overrides())
    return GradientConfig.model_validate(data)


def save_config(config: GradientConfig, path: str | None = None) -> None:
    path = path or default_config_path()
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    payload = {"gradient": config.model_dump()}
    fd, tmp_path = tempfile.mkstemp(
        prefix="config-", suffix=".toml", dir=os.path.dirname(path) or "."
    )
    try:
        with os.fdopen(fd, "wb") as f:
            tomli_w.dump(payload, f)
        os.replace(tmp_path, path)
    finally:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
