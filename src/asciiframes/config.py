from __future__ import annotations
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from .core import GlyphRamp, DEFAULT_CHARS
from .typealiases import ConfigurationError


__all__ = ['RenderConfig']


class RenderConfig(BaseModel):
    """Configuration values for rendering and playing back frames."""
    model_config = ConfigDict(frozen=True)

    chars: str = Field(default=DEFAULT_CHARS, min_length=1, description="The glyph ramp, from the darkest to the lightest character. A denser ramp gives finer tonal gradation but more look-alike glyphs at small sizes.")
    reverse_chars: bool = Field(default=False, description="Reverse the ramp, for dark text on a light background.")
    edge_detection: bool = Field(default=True, description="Run the Sobel edge stage before mapping glyphs.")
    fps: float = Field(default=50.0, gt=0.0, description="Playback rate of frame sequences.")
    width: Optional[int] = Field(default=None, gt=0, description="Available columns, or the terminal width when unset.")
    height: Optional[int] = Field(default=None, gt=0, description="Available lines, or the terminal height when unset.")

    @classmethod
    def create(cls, **values: Any) -> RenderConfig:
        """Build a config from keyword arguments, raising ``ConfigurationError`` on invalid values."""
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e

    def ramp(self) -> GlyphRamp:
        return GlyphRamp(self.chars, reverse=self.reverse_chars)
