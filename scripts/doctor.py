import asyncio
import sys

from src.config.logging import configure_logging
from src.config.settings import get_settings
from src.paths.utils import normalize_file_path
from src.readiness.report import ReadinessReport, build_readiness_report


def _report_lines(report: ReadinessReport) -> list[tuple[bool, str]]:
    lines = [(False, f"configuration: {error}") for error in report.config_errors]

    host = report.host
    lines.append(
        (
            host.reachable,
            f"host {host.host} {'reachable' if host.reachable else 'unreachable'} "
            f"({host.method.value}: {host.detail})",
        )
    )

    port = report.port
    if port.open:
        lines.append((True, f"bridge endpoint {report.endpoint_label} accepting connections"))
    else:
        lines.append((False, f"bridge endpoint {report.endpoint_label} {port.status.value}: {port.detail}"))
        if report.suggested_ports:
            suggestions = ", ".join(str(candidate) for candidate in report.suggested_ports)
            lines.append((False, f"alternate ports to try: {suggestions}"))

    if report.installation is None:
        lines.append((True, "engine installation not configured, skipped"))
    else:
        lines.append((report.installation.is_valid, report.installation.summary()))
    return lines


def main() -> int:
    settings = get_settings()
    config = settings.to_configuration()

    log_file = None
    if config.enable_logging:
        log_file = normalize_file_path(config.log_file_path, lambda message: print(f"[WARN] {message}")) or None
    configure_logging(settings.log_level, log_file)

    print(config.describe())
    report = asyncio.run(build_readiness_report(config, timeout_ms=settings.probe_timeout_ms))

    for ok, message in _report_lines(report):
        marker = "OK" if ok else "FAIL"
        print(f"[{marker}] {message}")

    if not report.ready:
        print("Doctor failed")
        return 1

    print("Doctor OK")
    return 0


if __name__ == "__main__":
    sys.exit(main())
