"""Configuration management for resynth."""

from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RESYNTH_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Directories
    output_dir: Path = Field(
        default=Path("./output"),
        description="Default output directory for rendered files",
    )

    # Instrument
    soundfont_path: Path | None = Field(
        default=None,
        description="SoundFont (.sf2) used to render the transcribed notes",
    )
    bank: int | None = Field(
        default=None,
        ge=0,
        le=16383,
        description="SoundFont bank to select (default: whatever the SoundFont assigns)",
    )
    preset: int | None = Field(
        default=None,
        ge=0,
        le=127,
        description="SoundFont preset to select (default: whatever the SoundFont assigns)",
    )
    synth_gain: float = Field(
        default=0.2,
        gt=0.0,
        le=10.0,
        description="FluidSynth master gain",
    )

    # Analysis
    sample_rate: int | None = Field(
        default=None,
        gt=0,
        description="Expected input sample rate. None accepts the rate of the input file",
    )
    fft_size: int = Field(
        default=1024,
        gt=0,
        description="Analysis frame length in samples (power of two)",
    )
    aggregate_size: int | None = Field(
        default=None,
        gt=0,
        description="Samples per aggregate window; one pitch estimate per window. "
        "None uses one second at the input sample rate",
    )
    min_frequency: float = Field(
        default=20.0,
        gt=0.0,
        description="Lowest dominant frequency (Hz) accepted as a pitch",
    )
    max_frequency: float = Field(
        default=20000.0,
        gt=0.0,
        description="Highest dominant frequency (Hz) accepted as a pitch",
    )

    # Playback
    velocity: int = Field(
        default=100,
        ge=1,
        le=127,
        description="MIDI note-on velocity",
    )
    channel: int = Field(
        default=0,
        ge=0,
        le=15,
        description="Synth channel used for every note",
    )
    emit_rests: bool = Field(
        default=False,
        description="Render silence for windows without a usable pitch instead of dropping them",
    )

    @field_validator("fft_size")
    @classmethod
    def _fft_size_power_of_two(cls, value: int) -> int:
        if value & (value - 1):
            raise ValueError(f"fft_size must be a power of two, got {value}")
        return value

    @model_validator(mode="after")
    def _frequency_band_ordered(self) -> "Settings":
        if self.min_frequency >= self.max_frequency:
            raise ValueError(
                f"min_frequency ({self.min_frequency}) must be below "
                f"max_frequency ({self.max_frequency})"
            )
        return self


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure(**overrides: object) -> Settings:
    """Configure settings with overrides. Useful for testing."""
    global _settings
    _settings = Settings(**overrides)  # type: ignore[arg-type]
    return _settings
