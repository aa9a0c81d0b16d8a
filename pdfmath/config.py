"""
Configuration for the pdfmath service.

- Render options (image and PDF) with request-level defaults
- Service settings read from the environment
- Logging setup
"""

import os
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


def _pick(options: Dict[str, Any], key: str, default: float) -> float:
    # falsy values (missing, null, 0, "") fall back to the default
    value = options.get(key)
    if not value:
        return default
    return float(value)


def _as_dict(options: Any) -> Dict[str, Any]:
    return options if isinstance(options, dict) else {}


# ============================================================================
# Render options
# ============================================================================

@dataclass
class ImageOptions:
    """Text -> JPEG canvas settings."""
    width: float = 800
    height: float = 600
    padding: float = 40
    font_size: float = 16
    line_height_factor: float = 1.8
    jpeg_quality: int = 95
    text_color: str = "#000000"
    accent_color: str = "#2563eb"
    background: str = "white"
    font_family: str = "sans-serif"

    @property
    def line_height(self) -> float:
        return self.font_size * self.line_height_factor

    @classmethod
    def from_request(cls, options: Optional[Any] = None) -> "ImageOptions":
        opts = _as_dict(options)
        return cls(
            width=_pick(opts, "width", cls.width),
            height=_pick(opts, "height", cls.height),
            padding=_pick(opts, "padding", cls.padding),
            font_size=_pick(opts, "fontSize", cls.font_size),
        )


@dataclass
class PdfOptions:
    """Text -> PDF page settings (points)."""
    margin: float = 50
    font_size: float = 12
    line_height_factor: float = 1.5
    page_format: str = "a4"
    text_color: Tuple[int, int, int] = (0, 0, 0)
    accent_color: Tuple[int, int, int] = (37, 99, 235)
    bullet_indent: float = 20

    @property
    def line_height(self) -> float:
        return self.font_size * self.line_height_factor

    @classmethod
    def from_request(cls, options: Optional[Any] = None) -> "PdfOptions":
        opts = _as_dict(options)
        return cls(
            margin=_pick(opts, "margin", cls.margin),
            font_size=_pick(opts, "fontSize", cls.font_size),
        )


# ============================================================================
# Service settings
# ============================================================================

@dataclass
class ServiceConfig:
    host: str = "0.0.0.0"
    port: int = 5001
    max_upload_mb: int = 25
    pdf_render_scale: float = 2.0
    log_level: str = "INFO"
    cors_origins: str = "*"

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        return cls(
            host=os.getenv("HOST", cls.host),
            port=int(os.getenv("PORT", str(cls.port))),
            max_upload_mb=int(os.getenv("MAX_UPLOAD_MB", str(cls.max_upload_mb))),
            pdf_render_scale=float(os.getenv("PDF_RENDER_SCALE", str(cls.pdf_render_scale))),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            cors_origins=os.getenv("CORS_ORIGINS", cls.cors_origins),
        )
