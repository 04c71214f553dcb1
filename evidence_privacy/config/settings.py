from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    inbox_dir: Path = Path("/app/inbox")
    evidence_dir: Path = Path("/app/evidence")

    image_max_width: int = 1920
    image_max_height: int = 1080
    image_quality: float = 0.85
    output_format: str = "jpeg"
    strip_metadata: bool = True

    noise_enabled: bool = True
    noise_intensity: float = 0.3
    noise_scale: float = 10.0
    noise_seed: int | None = None

    batch_workers: int = 1

    max_files_per_submission: int = 5
    max_file_size_bytes: int = 10 * 1024 * 1024
    allowed_mime_types: list[str] = [
        "image/jpeg",
        "image/png",
        "image/gif",
        "image/webp",
        "video/mp4",
        "video/webm",
    ]
