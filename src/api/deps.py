import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from fastapi import Request

from src.adapters.clock import SystemClock
from src.components.resolver import RedirectResolver

DEFAULT_ADDRESS = "127.0.0.1:5621"
DEFAULT_CONFIG_PATH = "links.toml"


# --- Settings ---
def parse_address(address: str) -> tuple[str, int]:
    """Split "host:port" (or "[v6]:port") into its parts."""
    host, sep, port = address.rpartition(":")
    if not sep or not host or not port.isdigit():
        raise ValueError(f"Invalid address {address!r}, expected host:port")
    port_number = int(port)
    if not 0 < port_number < 65536:
        raise ValueError(f"Invalid port in address {address!r}")
    return host.strip("[]"), port_number


def validate_config_path(value: str) -> Path:
    """Reject paths that name a directory."""
    if value.endswith("/") or value.endswith("\\"):
        raise ValueError(f"The path at '{value}' must be a file, not a directory.")
    return Path(value)


@dataclass(frozen=True)
class Settings:
    config_path: Path
    host: str
    port: int
    watch_interval: float = 1.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        host, port = parse_address(os.environ.get("LYNX_ADDRESS", DEFAULT_ADDRESS))
        return cls(
            config_path=validate_config_path(os.environ.get("LYNX_CONFIG", DEFAULT_CONFIG_PATH)),
            host=host,
            port=port,
            watch_interval=float(os.environ.get("LYNX_WATCH_INTERVAL", "1.0")),
            log_level=os.environ.get("LYNX_LOG_LEVEL", "INFO").upper(),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()


# --- Clock ---
@lru_cache
def get_clock() -> SystemClock:
    return SystemClock()


# --- Resolver ---
def get_resolver(request: Request) -> RedirectResolver:
    resolver: RedirectResolver = request.app.state.resolver
    return resolver
