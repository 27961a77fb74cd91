from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", frozen=True
    )

    # Transcription backend (required, no defaults)
    whisper_server_url: str
    whisper_model: str
    max_audio_size: int = Field(gt=0)  # bytes, applies to downloads and uploads

    # Listen addresses
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    ui_enabled: bool = True
    ui_port: int = 7500

    # Network budgets (seconds)
    fetch_timeout: float = 60.0
    transcription_timeout: float = 600.0

    log_level: str = "INFO"

    @property
    def transcription_endpoint(self) -> str:
        return f"{self.whisper_server_url.rstrip('/')}/v1/audio/transcriptions"

    @property
    def max_audio_size_mb(self) -> int:
        return self.max_audio_size // 1024 // 1024
