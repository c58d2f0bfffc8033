"""Renderer defaults, optionally overridden from a YAML file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, Field, ValidationError

from mdchart.core.constants import (
    DARK_THEME_DEFAULTS,
    DEFAULT_BACKGROUND,
    DEFAULT_HEIGHT,
    DEFAULT_PALETTE,
    DEFAULT_WIDTH,
    HEATMAP_PALETTE,
    LIGHT_THEME_DEFAULTS,
)
from mdchart.core.errors import ConfigError

logger = logging.getLogger(__name__)


class ThemeSettings(BaseModel):
    background: str
    text: str
    axis: str
    grid: str


def _default_light() -> ThemeSettings:
    text, axis, grid = LIGHT_THEME_DEFAULTS
    return ThemeSettings(background=DEFAULT_BACKGROUND, text=text, axis=axis, grid=grid)


def _default_dark() -> ThemeSettings:
    bg, text, axis, grid = DARK_THEME_DEFAULTS
    return ThemeSettings(background=bg, text=text, axis=axis, grid=grid)


class Settings(BaseModel):
    """
    Defaults applied to every chart built by `new_chart`.

    Example YAML:

        width: 640
        palette: ["#1f77b4", "#ff7f0e"]
        dark_mode: false
        dark_theme:
          background: "#000000"
          text: "#eeeeee"
          axis: "#888888"
          grid: "#222222"
    """

    width: int = Field(DEFAULT_WIDTH, gt=0)
    height: int = Field(DEFAULT_HEIGHT, gt=0)
    palette: List[str] = Field(default_factory=lambda: list(DEFAULT_PALETTE), min_length=1)
    heatmap_palette: List[str] = Field(
        default_factory=lambda: list(HEATMAP_PALETTE), min_length=1
    )
    dark_mode: bool = True
    light_theme: ThemeSettings = Field(default_factory=_default_light)
    dark_theme: ThemeSettings = Field(default_factory=_default_dark)


def load_settings(path: str | Path) -> Settings:
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {path}")
    try:
        with p.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file is not valid YAML: {path}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Config file must contain a mapping: {path}")

    try:
        settings = Settings.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e

    logger.debug("Loaded settings from %s", p)
    return settings
