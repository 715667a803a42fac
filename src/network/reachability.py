import asyncio
import math
import platform
from typing import Iterable, Protocol

import structlog

from src.contracts.results import (
    Endpoint,
    PortProbeResult,
    ProbeStatus,
    ReachabilityMethod,
    ReachabilityResult,
)
from src.network.endpoints import DEFAULT_LIVELINK_PORT

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT_MS = 5000
LOCALHOST_ADDRESSES = frozenset({"localhost", "127.0.0.1", "::1", "0.0.0.0"})


class Connection(Protocol):
    def is_closing(self) -> bool: ...

    def close(self) -> None: ...

    async def wait_closed(self) -> None: ...


class NetworkStack(Protocol):
    async def ping(self, host: str, timeout_seconds: float) -> bool: ...

    async def open_connection(self, host: str, port: int) -> Connection: ...


def _ping_command(host: str, timeout_seconds: float) -> list[str]:
    system = platform.system().lower()
    if system == "windows":
        return ["ping", "-n", "1", "-w", str(int(timeout_seconds * 1000)), host]
    whole_seconds = str(max(1, math.ceil(timeout_seconds)))
    if system == "darwin":
        return ["ping", "-c", "1", "-t", whole_seconds, host]
    return ["ping", "-c", "1", "-W", whole_seconds, host]


class SystemNetworkStack:
    """ICMP through the platform ``ping`` binary, TCP through asyncio streams."""

    async def ping(self, host: str, timeout_seconds: float) -> bool:
        process = await asyncio.create_subprocess_exec(
            *_ping_command(host, timeout_seconds),
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
        )
        try:
            return await process.wait() == 0
        finally:
            if process.returncode is None:
                process.kill()
                await process.wait()

    async def open_connection(self, host: str, port: int) -> Connection:
        _, writer = await asyncio.open_connection(host, port)
        return writer


def is_localhost_address(host: str | None) -> bool:
    if host is None or not host.strip():
        return False
    return host.lower() in LOCALHOST_ADDRESSES


def is_valid_port(port: int) -> bool:
    return 1 <= port <= 65535


async def _close_quietly(connection: Connection) -> None:
    try:
        connection.close()
        await connection.wait_closed()
    except Exception as exc:  # noqa: BLE001
        logger.debug("connection_close_failed", error=str(exc))


async def probe_port(
    host: str | None,
    port: int,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    *,
    network: NetworkStack | None = None,
) -> PortProbeResult:
    candidate = (host or "").strip()
    if not candidate or not is_valid_port(port) or timeout_ms <= 0:
        return PortProbeResult(
            host=host or "",
            port=port,
            open=False,
            status=ProbeStatus.INVALID_ARGUMENT,
            detail="host must be non-empty, port within 1-65535 and timeout positive",
        )

    network = network or SystemNetworkStack()
    connection: Connection | None = None
    try:
        connection = await asyncio.wait_for(
            network.open_connection(candidate, port),
            timeout=timeout_ms / 1000,
        )
        if connection.is_closing():
            return PortProbeResult(
                host=candidate,
                port=port,
                open=False,
                status=ProbeStatus.UNREACHABLE,
                detail="connection closed immediately",
            )
        return PortProbeResult(host=candidate, port=port, open=True, status=ProbeStatus.OK)
    except asyncio.TimeoutError:
        logger.debug("port_probe_timeout", host=candidate, port=port, timeout_ms=timeout_ms)
        return PortProbeResult(
            host=candidate,
            port=port,
            open=False,
            status=ProbeStatus.TIMEOUT,
            detail=f"no connection within {timeout_ms} ms",
        )
    except Exception as exc:  # noqa: BLE001
        logger.debug("port_probe_failed", host=candidate, port=port, error=str(exc))
        return PortProbeResult(
            host=candidate,
            port=port,
            open=False,
            status=ProbeStatus.UNREACHABLE,
            detail=str(exc) or type(exc).__name__,
        )
    finally:
        if connection is not None:
            await _close_quietly(connection)


async def _icmp_echo(network: NetworkStack, host: str, timeout_ms: int) -> tuple[ProbeStatus, str]:
    timeout_seconds = timeout_ms / 1000
    try:
        replied = await asyncio.wait_for(network.ping(host, timeout_seconds), timeout=timeout_seconds)
    except asyncio.TimeoutError:
        return ProbeStatus.TIMEOUT, f"no echo reply within {timeout_ms} ms"
    except Exception as exc:  # noqa: BLE001
        return ProbeStatus.UNREACHABLE, f"echo request failed: {str(exc) or type(exc).__name__}"
    if replied:
        return ProbeStatus.OK, "echo reply received"
    return ProbeStatus.UNREACHABLE, "no echo reply"


async def probe_host(
    host: str | None,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    *,
    fallback_port: int | None = DEFAULT_LIVELINK_PORT,
    network: NetworkStack | None = None,
) -> ReachabilityResult:
    """Best-effort liveness check for ``host``.

    Loopback identities are reachable without any I/O, whatever the timeout.
    Otherwise one ICMP echo is sent; when it fails and ``fallback_port`` is
    set, a TCP connect to that port is tried within the time left. Never raises.
    """
    candidate = (host or "").strip()
    if candidate and is_localhost_address(candidate):
        return ReachabilityResult(
            host=candidate,
            reachable=True,
            method=ReachabilityMethod.LOOPBACK,
            status=ProbeStatus.OK,
            detail="loopback address",
        )

    # A leading dash would be read as an option by the ping binary.
    if not candidate or candidate.startswith("-") or timeout_ms <= 0:
        return ReachabilityResult(
            host=host or "",
            reachable=False,
            method=ReachabilityMethod.UNREACHABLE,
            status=ProbeStatus.INVALID_ARGUMENT,
            detail="host must be non-empty and timeout positive",
        )

    network = network or SystemNetworkStack()
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout_ms / 1000
    status, detail = await _icmp_echo(network, candidate, timeout_ms)
    if status is ProbeStatus.OK:
        return ReachabilityResult(
            host=candidate,
            reachable=True,
            method=ReachabilityMethod.ICMP_ECHO,
            status=status,
            detail=detail,
        )

    # The fallback only gets what is left of the caller's timeout.
    remaining_ms = int((deadline - loop.time()) * 1000)
    if fallback_port is not None and remaining_ms <= 0:
        detail = f"{detail}; no time left for tcp port {fallback_port}"
    elif fallback_port is not None:
        port_result = await probe_port(candidate, fallback_port, remaining_ms, network=network)
        if port_result.open:
            return ReachabilityResult(
                host=candidate,
                reachable=True,
                method=ReachabilityMethod.TCP_FALLBACK,
                status=ProbeStatus.OK,
                detail=f"{detail}; tcp port {fallback_port} accepted connection",
            )
        detail = f"{detail}; tcp port {fallback_port}: {port_result.status.value}"

    logger.debug("host_unreachable", host=candidate, status=status.value, detail=detail)
    return ReachabilityResult(
        host=candidate,
        reachable=False,
        method=ReachabilityMethod.UNREACHABLE,
        status=status,
        detail=detail,
    )


async def is_host_reachable(
    host: str | None,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    *,
    fallback_port: int | None = DEFAULT_LIVELINK_PORT,
    network: NetworkStack | None = None,
) -> bool:
    result = await probe_host(host, timeout_ms, fallback_port=fallback_port, network=network)
    return result.reachable


async def is_port_open(
    host: str | None,
    port: int,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    *,
    network: NetworkStack | None = None,
) -> bool:
    result = await probe_port(host, port, timeout_ms, network=network)
    return result.open


async def probe_endpoints(
    endpoints: Iterable[Endpoint],
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    *,
    network: NetworkStack | None = None,
) -> list[PortProbeResult]:
    network = network or SystemNetworkStack()
    return list(
        await asyncio.gather(
            *(probe_port(endpoint.host, endpoint.port, timeout_ms, network=network) for endpoint in endpoints)
        )
    )
