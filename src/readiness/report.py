import asyncio

import structlog
from pydantic import BaseModel, ConfigDict

from src.config.connection import LiveLinkConfiguration
from src.contracts.results import (
    InstallationValidationResult,
    PortProbeResult,
    ProbeStatus,
    ReachabilityMethod,
    ReachabilityResult,
)
from src.installation.validator import Filesystem, validate_installation
from src.network.endpoints import format_endpoint, suggest_alternate_ports
from src.network.reachability import NetworkStack, SystemNetworkStack, probe_host, probe_port

logger = structlog.get_logger(__name__)


class ReadinessReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    endpoint_label: str
    config_errors: tuple[str, ...] = ()
    host: ReachabilityResult
    port: PortProbeResult
    installation: InstallationValidationResult | None = None
    suggested_ports: tuple[int, ...] = ()

    @property
    def ready(self) -> bool:
        installation_ok = self.installation is None or self.installation.is_valid
        return not self.config_errors and self.host.reachable and self.port.open and installation_ok


async def _check_installation(path: str, filesystem: Filesystem | None) -> InstallationValidationResult | None:
    if not path:
        return None
    # Filesystem checks block; keep them off the loop running the probes.
    return await asyncio.to_thread(validate_installation, path, filesystem)


async def build_readiness_report(
    config: LiveLinkConfiguration,
    *,
    timeout_ms: int | None = None,
    network: NetworkStack | None = None,
    filesystem: Filesystem | None = None,
) -> ReadinessReport:
    """Point-in-time readiness of the bridge endpoint and the local engine install.

    Invalid configuration values are reported and then replaced by defaults so the
    probes still run. ``timeout_ms`` overrides the configured connection timeout
    for each probe. Installation is only checked when a path is configured.
    """
    errors = tuple(config.validation_errors())
    effective = config.sanitized()
    network = network or SystemNetworkStack()
    probe_timeout_ms = timeout_ms if timeout_ms is not None and timeout_ms > 0 else effective.timeout_ms

    # Port reachability is probed directly, so the host probe needs no TCP fallback.
    host_result, port_result, installation = await asyncio.gather(
        probe_host(effective.host, probe_timeout_ms, fallback_port=None, network=network),
        probe_port(effective.host, effective.port, probe_timeout_ms, network=network),
        _check_installation(config.unreal_engine_path.strip(), filesystem),
    )
    if port_result.open and not host_result.reachable:
        host_result = host_result.model_copy(
            update={
                "reachable": True,
                "method": ReachabilityMethod.TCP_FALLBACK,
                "status": ProbeStatus.OK,
                "detail": f"{host_result.detail}; tcp port {effective.port} accepted connection",
            }
        )

    report = ReadinessReport(
        endpoint_label=format_endpoint(effective.host, effective.port),
        config_errors=errors,
        host=host_result,
        port=port_result,
        installation=installation,
        suggested_ports=() if port_result.open else suggest_alternate_ports(effective.port),
    )
    logger.info(
        "readiness_checked",
        endpoint=report.endpoint_label,
        ready=report.ready,
        host_method=host_result.method.value,
        port_status=port_result.status.value,
        installation_valid=None if installation is None else installation.is_valid,
    )
    return report
