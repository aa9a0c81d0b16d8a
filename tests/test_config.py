"""
Tests for option and service configuration.
"""

import pytest

from pdfmath.config import PdfOptions, ServiceConfig


class TestPdfOptions:

    def test_defaults(self):
        opts = PdfOptions.from_request({})

        assert (opts.margin, opts.font_size) == (50, 12)
        assert opts.line_height == pytest.approx(18)

    def test_overrides(self):
        opts = PdfOptions.from_request({"margin": 72, "fontSize": 10})

        assert opts.margin == 72.0
        assert opts.font_size == 10.0

    def test_unknown_keys_ignored(self):
        assert PdfOptions.from_request({"width": 100}) == PdfOptions()

    def test_bad_value_raises(self):
        with pytest.raises(ValueError):
            PdfOptions.from_request({"margin": "wide"})


class TestServiceConfig:

    def test_defaults(self, monkeypatch):
        for name in ("HOST", "PORT", "MAX_UPLOAD_MB", "PDF_RENDER_SCALE", "LOG_LEVEL", "CORS_ORIGINS"):
            monkeypatch.delenv(name, raising=False)

        cfg = ServiceConfig.from_env()

        assert cfg.port == 5001
        assert cfg.pdf_render_scale == 2.0
        assert cfg.max_upload_bytes == 25 * 1024 * 1024

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("MAX_UPLOAD_MB", "5")
        monkeypatch.setenv("PDF_RENDER_SCALE", "1.5")

        cfg = ServiceConfig.from_env()

        assert cfg.port == 8080
        assert cfg.max_upload_bytes == 5 * 1024 * 1024
        assert cfg.pdf_render_scale == 1.5
