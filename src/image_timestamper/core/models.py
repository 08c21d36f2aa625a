"""Shared data models for the image timestamper."""

from typing import List, Tuple
from pydantic import BaseModel, Field, model_validator


DEFAULT_FONT_CANDIDATES: Tuple[str, ...] = (
    # Arial metrics match the 0.52 width factor best
    "arialbd.ttf",
    "Arial Bold.ttf",
    "/Library/Fonts/Arial Bold.ttf",
    "LiberationSans-Bold.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
    "/usr/share/fonts/truetype/liberation2/LiberationSans-Bold.ttf",
    "DejaVuSans-Bold.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
)

DEFAULT_IMAGE_EXTENSIONS: Tuple[str, ...] = (".jpg", ".jpeg", ".png", ".webp", ".tiff")


class StampConfig(BaseModel):
    """Configuration for overlay layout, rendering and encoding."""

    # Layout
    padding: float = Field(default=20, ge=0)
    box_padding: float = Field(default=7, ge=0)
    min_font_size: float = Field(default=16, gt=0)
    max_font_size: float = Field(default=48, gt=0)
    font_scale_divisor: float = Field(default=30, gt=0)
    char_width_factor: float = Field(default=0.52, gt=0)

    # Rendering
    corner_radius: float = Field(default=4, ge=0)
    box_color: str = "white"
    box_opacity: float = Field(default=0.95, ge=0, le=1)
    text_color: str = "black"
    shadow_color: str = "black"
    shadow_opacity: float = Field(default=0.3, ge=0, le=1)
    shadow_offset: int = 2
    shadow_blur: float = Field(default=2, ge=0)
    font_candidates: Tuple[str, ...] = DEFAULT_FONT_CANDIDATES

    # Encoding
    output_format: str = "JPEG"
    quality: int = Field(default=90, ge=1, le=100)

    # Timestamp
    timestamp_format: str = "%m/%d/%Y, %H:%M:%S"
    use_utc: bool = False

    # Files
    output_prefix: str = "timestamped_"
    image_extensions: Tuple[str, ...] = DEFAULT_IMAGE_EXTENSIONS

    @model_validator(mode="after")
    def _check_font_bounds(self) -> "StampConfig":
        if self.min_font_size > self.max_font_size:
            raise ValueError(
                f"min_font_size ({self.min_font_size}) must not exceed "
                f"max_font_size ({self.max_font_size})"
            )
        return self


class StampItem(BaseModel):
    """Represents an image to be stamped."""

    input_path: str
    output_path: str


class StampResult(BaseModel):
    """Result of stamping a single image."""

    input_path: str
    output_path: str = ""
    success: bool = False
    error: str = ""
    error_type: str = ""
    timestamp_text: str = ""
    width: int = 0
    height: int = 0
    processing_time: float = 0.0


class BatchReport(BaseModel):
    """Aggregate outcome of a batch run."""

    input_dir: str
    output_dir: str
    found_count: int = 0
    processed_count: int = 0
    error_count: int = 0
    processing_time: float = 0.0
    results: List[StampResult] = Field(default_factory=list)

    @property
    def failed(self) -> List[StampResult]:
        return [r for r in self.results if not r.success]

