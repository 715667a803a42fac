import pytest

from src.contracts.results import Endpoint
from src.network.endpoints import format_endpoint, parse_endpoint, suggest_alternate_ports


def test_format_endpoint_plain_host() -> None:
    assert format_endpoint("10.0.0.5", 7000) == "10.0.0.5:7000"
    assert format_endpoint("localhost", 1234) == "localhost:1234"


def test_format_endpoint_brackets_ipv6_literals() -> None:
    assert format_endpoint("::1", 7000) == "[::1]:7000"
    assert format_endpoint("[fe80::1]", 7000) == "[fe80::1]:7000"


@pytest.mark.parametrize("host", ["", "   ", None])
def test_format_endpoint_uses_placeholder_for_missing_host(host) -> None:  # noqa: ANN001
    formatted = format_endpoint(host, 80)

    assert formatted == "[invalid]:80"
    assert formatted.endswith(":80")


def test_suggest_alternate_ports_on_default_port() -> None:
    suggestions = suggest_alternate_ports(11111)

    assert suggestions == (11112, 11121, 11211, 11112, 11113)
    assert 11111 not in suggestions


def test_suggest_alternate_ports_on_custom_port() -> None:
    assert suggest_alternate_ports(9000) == (9001, 9010, 9100, 11111, 11112)


def test_suggest_alternate_ports_is_deterministic() -> None:
    assert suggest_alternate_ports(4242) == suggest_alternate_ports(4242)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("example.org:7000", Endpoint(host="example.org", port=7000)),
        ("example.org", Endpoint(host="example.org", port=11111)),
        ("[::1]:7000", Endpoint(host="::1", port=7000)),
        ("[::1]", Endpoint(host="::1", port=11111)),
        ("fe80::1", Endpoint(host="fe80::1", port=11111)),
    ],
)
def test_parse_endpoint_accepts_common_forms(value: str, expected: Endpoint) -> None:
    assert parse_endpoint(value) == expected


@pytest.mark.parametrize("value", ["", None, "host:notaport", "host:70000", "[::1", "[::1]x", ":80"])
def test_parse_endpoint_returns_none_for_malformed_input(value) -> None:  # noqa: ANN001
    assert parse_endpoint(value) is None


def test_endpoint_rejects_invalid_values() -> None:
    with pytest.raises(ValueError):
        Endpoint(host="  ", port=80)
    with pytest.raises(ValueError):
        Endpoint(host="example.org", port=0)


def test_endpoint_trims_host_before_formatting() -> None:
    endpoint = Endpoint(host=" ::1 ", port=7000)

    assert endpoint.host == "::1"
    assert format_endpoint(endpoint.host, endpoint.port) == "[::1]:7000"
