from pydantic import ValidationError

from src.contracts.results import Endpoint

DEFAULT_LIVELINK_PORT = 11111
INVALID_HOST_PLACEHOLDER = "[invalid]"


def format_endpoint(host: str | None, port: int) -> str:
    if host is None or not host.strip():
        return f"{INVALID_HOST_PLACEHOLDER}:{port}"

    # IPv6 literals need brackets so the port separator stays unambiguous.
    if ":" in host and not host.startswith("["):
        return f"[{host}]:{port}"

    return f"{host}:{port}"


def suggest_alternate_ports(base_port: int) -> tuple[int, int, int, int, int]:
    """Deterministic candidates to try when ``base_port`` looks taken.

    Suggestions are not checked for availability; probe them with
    ``is_port_open`` before use.
    """
    on_default = base_port == DEFAULT_LIVELINK_PORT
    return (
        base_port + 1,
        base_port + 10,
        base_port + 100,
        DEFAULT_LIVELINK_PORT + 1 if on_default else DEFAULT_LIVELINK_PORT,
        DEFAULT_LIVELINK_PORT + 2 if on_default else DEFAULT_LIVELINK_PORT + 1,
    )


def parse_endpoint(value: str | None, default_port: int = DEFAULT_LIVELINK_PORT) -> Endpoint | None:
    """Parse ``host``, ``host:port``, ``[v6]`` or ``[v6]:port``.

    Returns None for anything that does not yield a valid endpoint.
    """
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None

    host = text
    port_text = ""
    if text.startswith("["):
        closing = text.find("]")
        if closing == -1:
            return None
        host = text[1:closing]
        rest = text[closing + 1 :]
        if rest:
            if not rest.startswith(":"):
                return None
            port_text = rest[1:]
    elif text.count(":") == 1:
        host, port_text = text.split(":", 1)

    port = default_port
    if port_text:
        if not port_text.isdigit():
            return None
        port = int(port_text)

    try:
        return Endpoint(host=host, port=port)
    except ValidationError:
        return None
