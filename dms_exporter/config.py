"""DMS Exporter 설정

환경 변수는 모듈 상수로, CLI 플래그는 Settings로 읽는다.
"""

import argparse
import os
from dataclasses import dataclass


LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")
POLL_INTERVAL: float = float(os.environ.get("POLL_INTERVAL", "45"))
AWS_CONNECT_TIMEOUT: float = float(os.environ.get("AWS_CONNECT_TIMEOUT", "10"))
AWS_READ_TIMEOUT: float = float(os.environ.get("AWS_READ_TIMEOUT", "30"))

METRIC_NAMESPACE: str = "aws"
METRIC_SUBSYSTEM: str = "database_migration_service"
ROLE_SESSION_NAME: str = "assumeTestRole"

DEFAULT_LISTEN_ADDRESS: str = ":8080"
DEFAULT_REGION: str = "us-west-2"


@dataclass
class Settings:
    """CLI 플래그로 지정되는 실행 설정"""

    listen_address: str = DEFAULT_LISTEN_ADDRESS
    region: str = DEFAULT_REGION
    role: str = ""


def parse_listen_address(address: str) -> tuple[str | None, int]:
    """`host:port` 문자열을 (host, port)로 변환. host가 비면 None (IPv4/IPv6 모든 인터페이스)."""
    host, sep, port = address.rpartition(":")
    if not sep:
        raise ValueError(f"listen address {address!r} must be host:port")
    host = host.strip("[]") or None
    try:
        port_number = int(port)
    except ValueError:
        raise ValueError(f"invalid port in listen address {address!r}") from None
    if not 0 <= port_number <= 65535:
        raise ValueError(f"port out of range in listen address {address!r}")
    return host, port_number


def parse_args(argv: list[str] | None = None) -> Settings:
    parser = argparse.ArgumentParser(
        prog="dms-exporter",
        description="AWS Database Migration Service Prometheus exporter",
    )
    parser.add_argument(
        "--listen-address",
        default=DEFAULT_LISTEN_ADDRESS,
        help="The address to listen on for HTTP requests.",
    )
    parser.add_argument(
        "--region", default=DEFAULT_REGION, help="AWS Region to use"
    )
    parser.add_argument(
        "--role", default="", help="AWS Role ARN to Assume if required"
    )
    args = parser.parse_args(argv)

    try:
        parse_listen_address(args.listen_address)
    except ValueError as exc:
        parser.error(str(exc))

    return Settings(
        listen_address=args.listen_address,
        region=args.region,
        role=args.role,
    )
