import asyncio


class DummyConnection:
    def __init__(self, closing: bool = False) -> None:
        self.closing = closing
        self.closed = False

    def is_closing(self) -> bool:
        return self.closing or self.closed

    def close(self) -> None:
        self.closed = True

    async def wait_closed(self) -> None:
        return None


class DummyNetwork:
    def __init__(
        self,
        ping_reply: bool = True,
        open_ports: set[int] | None = None,
        ping_error: Exception | None = None,
        hang: bool = False,
    ) -> None:
        self.ping_reply = ping_reply
        self.open_ports = open_ports or set()
        self.ping_error = ping_error
        self.hang = hang
        self.calls: list[tuple] = []
        self.connections: list[DummyConnection] = []

    async def ping(self, host, timeout_seconds):  # noqa: ANN001
        self.calls.append(("ping", host, timeout_seconds))
        if self.hang:
            await asyncio.sleep(10)
        if self.ping_error is not None:
            raise self.ping_error
        return self.ping_reply

    async def open_connection(self, host, port):  # noqa: ANN001
        self.calls.append(("connect", host, port))
        if self.hang:
            await asyncio.sleep(10)
        if port not in self.open_ports:
            raise ConnectionRefusedError(f"connection refused on {port}")
        connection = DummyConnection()
        self.connections.append(connection)
        return connection


class FailingNetwork:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    async def ping(self, host, timeout_seconds):  # noqa: ANN001
        self.calls.append(("ping", host))
        raise PermissionError("raw sockets not permitted")

    async def open_connection(self, host, port):  # noqa: ANN001
        self.calls.append(("connect", host, port))
        raise OSError("network is unreachable")
