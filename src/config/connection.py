from pydantic import BaseModel, ConfigDict, ValidationError

from src.contracts.results import Endpoint

DEFAULT_SOURCE_NAME = "SimioSimulation"
DEFAULT_LOG_FILE = "SimioUnrealLiveLink.log"
DEFAULT_ENGINE_PATH = r"C:\Program Files\Epic Games\UE_5.3"
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 11111
DEFAULT_TIMEOUT_SECONDS = 5.0
DEFAULT_RETRY_ATTEMPTS = 3
MAX_TIMEOUT_SECONDS = 300.0
MAX_RETRY_ATTEMPTS = 10


class LiveLinkConfiguration(BaseModel):
    """Connection settings for a LiveLink source.

    Fields accept out-of-range values on purpose: ``validation_errors`` reports
    them and ``sanitized`` replaces them with defaults.
    """

    model_config = ConfigDict(frozen=True)

    source_name: str = DEFAULT_SOURCE_NAME
    enable_logging: bool = False
    log_file_path: str = DEFAULT_LOG_FILE
    unreal_engine_path: str = ""
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    connection_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS

    def validation_errors(self) -> list[str]:
        errors: list[str] = []
        if not self.source_name.strip():
            errors.append("Source Name must not be empty")
        if not self.host.strip():
            errors.append("LiveLink Host must not be empty")
        if not 1 <= self.port <= 65535:
            errors.append(f"LiveLink Port must be between 1 and 65535, got: {self.port}")
        if self.connection_timeout_seconds <= 0:
            errors.append("Connection Timeout must be positive")
        if self.connection_timeout_seconds > MAX_TIMEOUT_SECONDS:
            errors.append(f"Connection Timeout cannot exceed {MAX_TIMEOUT_SECONDS:.0f} seconds")
        if self.retry_attempts < 0:
            errors.append("Retry Attempts cannot be negative")
        if self.retry_attempts > MAX_RETRY_ATTEMPTS:
            errors.append(f"Retry Attempts cannot exceed {MAX_RETRY_ATTEMPTS}")
        return errors

    def sanitized(self) -> "LiveLinkConfiguration":
        timeout = self.connection_timeout_seconds
        if timeout <= 0 or timeout > MAX_TIMEOUT_SECONDS:
            timeout = DEFAULT_TIMEOUT_SECONDS
        retries = self.retry_attempts
        if retries < 0 or retries > MAX_RETRY_ATTEMPTS:
            retries = DEFAULT_RETRY_ATTEMPTS

        return LiveLinkConfiguration(
            source_name=self.source_name.strip() or DEFAULT_SOURCE_NAME,
            enable_logging=self.enable_logging,
            log_file_path=self.log_file_path.strip() or DEFAULT_LOG_FILE,
            unreal_engine_path=self.unreal_engine_path.strip() or DEFAULT_ENGINE_PATH,
            host=self.host.strip() or DEFAULT_HOST,
            port=self.port if 1 <= self.port <= 65535 else DEFAULT_PORT,
            connection_timeout_seconds=timeout,
            retry_attempts=retries,
        )

    @property
    def timeout_ms(self) -> int:
        return int(self.connection_timeout_seconds * 1000)

    def endpoint(self) -> Endpoint | None:
        try:
            return Endpoint(host=self.host, port=self.port)
        except ValidationError:
            return None

    def describe(self) -> str:
        return (
            f"LiveLinkConfiguration(Source:'{self.source_name}', Host:'{self.host}:{self.port}', "
            f"Timeout:{self.connection_timeout_seconds:.1f}s, Retries:{self.retry_attempts}, "
            f"Logging:{self.enable_logging})"
        )
