"""Configuration model for the iPhone metadata middleware."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from .constants import DEFAULT_STATUS_BAR_STYLE, DEFAULT_VIEWPORT


class IPhoneConfig(BaseModel):
    """Options resolved once when the middleware is constructed.

    The model is frozen: assigning to a field after construction raises a
    ``pydantic.ValidationError``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    manifest: Optional[str] = Field(
        default=None,
        description="Cache manifest file to generate and reference from the <html> tag.",
    )
    icon: Optional[str] = Field(
        default=None,
        description="57x57 home screen icon, added as an apple-touch-icon link.",
    )
    startup_image: Optional[str] = Field(
        default=None,
        description="320x460 PNG shown while the web app is launching.",
    )
    tidy: bool = Field(
        default=False,
        description="Re-indent the rewritten HTML before returning it.",
    )
    viewport: str = Field(
        default=DEFAULT_VIEWPORT,
        description="Content of the viewport meta tag.",
    )
    statusbar: str = Field(
        default=DEFAULT_STATUS_BAR_STYLE,
        description="apple-mobile-web-app-status-bar-style: gray, black or black-translucent.",
    )

    @field_validator("manifest", "icon", "startup_image", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    @field_validator("viewport", "statusbar", mode="before")
    @classmethod
    def _blank_is_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None or value == "":
            return cls.model_fields[info.field_name].default
        return value

    @property
    def wants_manifest(self) -> bool:
        return self.manifest is not None


__all__ = ["IPhoneConfig"]
