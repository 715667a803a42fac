from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.config.connection import LiveLinkConfiguration


class Settings(BaseSettings):
    # Don't hard-wire env_file here: unit tests should be able to control env values
    # without being overridden by a local `.env` checked into the repo.
    model_config = SettingsConfigDict(env_file_encoding="utf-8", extra="ignore")

    log_level: str = Field("INFO", alias="LOG_LEVEL")

    livelink_source_name: str = Field("SimioSimulation", alias="LIVELINK_SOURCE_NAME")
    livelink_host: str = Field("localhost", alias="LIVELINK_HOST")
    livelink_port: int = Field(11111, alias="LIVELINK_PORT")
    livelink_connection_timeout_seconds: float = Field(
        5.0,
        alias="LIVELINK_CONNECTION_TIMEOUT_SECONDS",
    )
    livelink_retry_attempts: int = Field(3, alias="LIVELINK_RETRY_ATTEMPTS")
    livelink_enable_logging: bool = Field(False, alias="LIVELINK_ENABLE_LOGGING")
    livelink_log_file: str = Field("SimioUnrealLiveLink.log", alias="LIVELINK_LOG_FILE")

    unreal_engine_path: str = Field(
        "",
        validation_alias=AliasChoices("UNREAL_ENGINE_PATH", "UE_ROOT"),
    )

    # Unset means each probe uses the connection timeout.
    probe_timeout_ms: int | None = Field(None, alias="PROBE_TIMEOUT_MS")

    def to_configuration(self) -> LiveLinkConfiguration:
        return LiveLinkConfiguration(
            source_name=self.livelink_source_name,
            enable_logging=self.livelink_enable_logging,
            log_file_path=self.livelink_log_file,
            unreal_engine_path=self.unreal_engine_path,
            host=self.livelink_host,
            port=self.livelink_port,
            connection_timeout_seconds=self.livelink_connection_timeout_seconds,
            retry_attempts=self.livelink_retry_attempts,
        )


@lru_cache
def get_settings() -> Settings:
    # Default runtime behavior: load from `.env` if present.
    return Settings(_env_file=".env", _env_file_encoding="utf-8")
