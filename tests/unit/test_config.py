"""Tests for faceblur.config module."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from faceblur.config import Settings


class TestSettings:
    """Tests for the Settings class."""

    def test_default_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that default values are set correctly."""
        for name in ("LOG_LEVEL", "LOG_FORMAT", "CROP_JPEG_QUALITY", "CROP_FORMAT"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv("CROP_OUTPUT_DIR", raising=False)

        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
        )

        assert settings.LOG_LEVEL == "INFO"
        assert settings.LOG_FORMAT == "console"
        # Same encode policy as the mobile editor (compress 0.8, JPEG)
        assert settings.CROP_JPEG_QUALITY == 80
        assert settings.CROP_FORMAT == "JPEG"
        assert settings.CROP_OUTPUT_DIR is None

    def test_env_var_override(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """Test that environment variables override defaults."""
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("CROP_JPEG_QUALITY", "65")
        monkeypatch.setenv("CROP_FORMAT", "PNG")
        monkeypatch.setenv("CROP_OUTPUT_DIR", str(tmp_path))

        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
        )

        assert settings.LOG_LEVEL == "DEBUG"
        assert settings.CROP_JPEG_QUALITY == 65
        assert settings.CROP_FORMAT == "PNG"
        assert settings.CROP_OUTPUT_DIR == tmp_path

    def test_log_format_options(self) -> None:
        """Test that LOG_FORMAT accepts valid options."""
        settings = Settings(
            LOG_FORMAT="json",
            _env_file=None,  # type: ignore[call-arg]
        )
        assert settings.LOG_FORMAT == "json"

    @pytest.mark.parametrize("quality", [0, 101])
    def test_quality_out_of_range(self, quality: int) -> None:
        with pytest.raises(ValidationError):
            Settings(
                CROP_JPEG_QUALITY=quality,
                _env_file=None,  # type: ignore[call-arg]
            )

    def test_unknown_format_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(
                CROP_FORMAT="GIF",  # type: ignore[arg-type]
                _env_file=None,  # type: ignore[call-arg]
            )

    def test_env_file_is_read(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.delenv("CROP_JPEG_QUALITY", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("CROP_JPEG_QUALITY=90\n")

        settings = Settings(
            _env_file=env_file,  # type: ignore[call-arg]
        )

        assert settings.CROP_JPEG_QUALITY == 90
