"""Runtime settings read from the environment (optionally via a .env file)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

_ROOT = Path(__file__).parent.parent.parent


@dataclass(frozen=True)
class Settings:
    data_dir: Path  # skyfield Loader directory (ephemeris cache)
    ephemeris: str  # Ephemeris file name, e.g. "de421.bsp"
    tick_ms: int  # Refresh cadence of the dial
    log_level: str

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from SUNDIAL_* environment variables.

        Raises:
            ValueError: When SUNDIAL_TICK_MS is not a positive integer.
        """
        tick_ms = int(os.environ.get("SUNDIAL_TICK_MS", "1000"))
        if tick_ms <= 0:
            raise ValueError(f"SUNDIAL_TICK_MS must be positive: {tick_ms}")
        return cls(
            data_dir=Path(os.environ.get("SUNDIAL_DATA_DIR", str(_ROOT / "resources"))),
            ephemeris=os.environ.get("SUNDIAL_EPHEMERIS", "de421.bsp"),
            tick_ms=tick_ms,
            log_level=os.environ.get("SUNDIAL_LOG_LEVEL", "INFO").upper(),
        )
