from __future__ import annotations

from dataclasses import dataclass
import os

# Well known QuakeWorld masters
DEFAULT_MASTERS = (
    "master.quakeworld.nu:27000",
    "master.quakeservers.net:27000",
    "qwmaster.fodquake.net:27000",
)


@dataclass(frozen=True)
class Settings:
    sim_http: str
    sim_udp_host: str
    sim_udp_port: int


def get_settings() -> Settings:
    """
    Centralized configuration for the master simulator and tests.
    Values come from environment variables with safe defaults.
    """
    return Settings(
        sim_http=os.getenv("MASTER_SIM_HTTP", "http://127.0.0.1:8027"),
        sim_udp_host=os.getenv("MASTER_SIM_UDP_HOST", "127.0.0.1"),
        sim_udp_port=int(os.getenv("MASTER_SIM_UDP_PORT", "27000")),
    )
