"""
Configuration schema and loader for the photostrip compositor.

Defines Pydantic models representing structured configuration sections
and a TOML-based config loader with validation support.
"""

from pathlib import Path

import tomlkit
from pydantic import BaseModel, Field

from photostrip.config_defaults import (
    DEFAULT_ATTRIBUTION,
    DEFAULT_ATTRIBUTION_OFFSET,
    DEFAULT_ATTRIBUTION_PX,
    DEFAULT_ATTRIBUTION_SPACING,
    DEFAULT_DATE_OFFSET,
    DEFAULT_DATE_PX,
    DEFAULT_DATE_SPACING,
    DEFAULT_FILENAME_PREFIX,
    DEFAULT_FOOTER_HEIGHT,
    DEFAULT_PADDING,
    DEFAULT_PHOTO_WIDTH,
    DEFAULT_QUALITY,
    DEFAULT_RULE_HALF_WIDTH,
    DEFAULT_RULE_OFFSET,
    DEFAULT_RULE_THICKNESS,
    DEFAULT_TITLE,
    DEFAULT_TITLE_OFFSET,
    DEFAULT_TITLE_PX,
    DEFAULT_TITLE_SPACING,
)
from photostrip.constants import JPEG_QUALITY_MAX, JPEG_QUALITY_MIN


class LayoutConfig(BaseModel):
    """Fixed spacing constants for the single-column strip."""

    photo_width: int = Field(DEFAULT_PHOTO_WIDTH, ge=1)
    padding: int = Field(DEFAULT_PADDING, ge=0)
    footer_height: int = Field(DEFAULT_FOOTER_HEIGHT, ge=0)


class FooterConfig(BaseModel):
    """Text, sizes and offsets for the footer typography."""

    title: str = DEFAULT_TITLE
    attribution: str = DEFAULT_ATTRIBUTION
    title_px: int = Field(DEFAULT_TITLE_PX, ge=1)
    date_px: int = Field(DEFAULT_DATE_PX, ge=1)
    attribution_px: int = Field(DEFAULT_ATTRIBUTION_PX, ge=1)
    title_spacing: int = Field(DEFAULT_TITLE_SPACING, ge=0)
    date_spacing: int = Field(DEFAULT_DATE_SPACING, ge=0)
    attribution_spacing: int = Field(DEFAULT_ATTRIBUTION_SPACING, ge=0)
    title_offset: int = DEFAULT_TITLE_OFFSET
    date_offset: int = DEFAULT_DATE_OFFSET
    rule_offset: int = DEFAULT_RULE_OFFSET
    attribution_offset: int = DEFAULT_ATTRIBUTION_OFFSET
    rule_half_width: int = Field(DEFAULT_RULE_HALF_WIDTH, ge=0)
    rule_thickness: int = Field(DEFAULT_RULE_THICKNESS, ge=1)
    font_path: str | None = None


class ExportConfig(BaseModel):
    """Control encoding quality and download naming."""

    quality: int = Field(
        DEFAULT_QUALITY,
        ge=JPEG_QUALITY_MIN,
        le=JPEG_QUALITY_MAX,
    )
    filename_prefix: str = Field(DEFAULT_FILENAME_PREFIX, min_length=1)


class PhotostripConfig(BaseModel):
    """
    Root configuration object combining all supported sections.

    Mirrors the structure of photostrip.toml.
    """

    layout: LayoutConfig = Field(
        default_factory=lambda: LayoutConfig.model_validate({}),
    )
    footer: FooterConfig = Field(
        default_factory=lambda: FooterConfig.model_validate({}),
    )
    export: ExportConfig = Field(
        default_factory=lambda: ExportConfig.model_validate({}),
    )


class ConfigLoader:
    """
    Loads and parses a TOML configuration file into a typed config object.

    Falls back to defaults for any missing subsections or fields.
    """

    @staticmethod
    def load(path: str) -> PhotostripConfig:
        """Load and validate a photostrip configuration from a TOML file."""
        config_path = Path(path)
        if not config_path.is_file():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with config_path.open("r", encoding="utf-8") as f:
            doc = tomlkit.load(f)

        return PhotostripConfig.model_validate(doc.unwrap())
