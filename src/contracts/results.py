from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProbeStatus(str, Enum):
    OK = "ok"
    TIMEOUT = "timeout"
    UNREACHABLE = "unreachable"
    INVALID_ARGUMENT = "invalid_argument"


class ReachabilityMethod(str, Enum):
    LOOPBACK = "loopback"
    ICMP_ECHO = "icmp_echo"
    TCP_FALLBACK = "tcp_fallback"
    UNREACHABLE = "unreachable"


class Endpoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str
    port: int = Field(ge=1, le=65535)

    @field_validator("host")
    @classmethod
    def _normalize_host(cls, value: str) -> str:
        host = value.strip()
        if not host:
            raise ValueError("host cannot be empty")
        return host


class ReachabilityResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str
    reachable: bool
    method: ReachabilityMethod
    status: ProbeStatus
    detail: str = ""


class PortProbeResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str
    port: int
    open: bool
    status: ProbeStatus
    detail: str = ""


class InstallationValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str = ""
    is_valid: bool = False
    error_message: str = ""
    version: str = "Unknown"
    executable_path: str = ""
    has_ue4_editor: bool = False
    has_ue5_editor: bool = False

    @classmethod
    def invalid(cls, path: str, message: str) -> "InstallationValidationResult":
        return cls(path=path or "", is_valid=False, error_message=message)

    def summary(self) -> str:
        if self.is_valid:
            return f"Valid UE installation: {self.version} at {self.path}"
        return f"Invalid UE installation: {self.error_message}"
