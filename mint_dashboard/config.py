from typing import Optional
from pydantic import BaseModel, Field
import os
from functools import lru_cache


class Settings(BaseModel):
    # Upstream mint (proxied by /api/mint-info and /api/mint-settings)
    mint_url: Optional[str] = Field(
        default=None,
        description="Base URL of the upstream mint, e.g. http://mint.local:3338",
    )
    mint_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout for requests to the upstream mint",
    )

    # Resource sampling
    disk_mount_point: str = Field(
        default="/",
        description="Mount point whose capacity is reported by /api/system-info",
    )
    cpu_sample_interval: float = Field(
        default=0.1,
        ge=0,
        description="Length of the CPU measurement window in seconds",
    )

    log_level: str = Field(
        default="INFO",
        description="Log level name for the application loggers",
    )

    @classmethod
    def from_env(cls) -> "Settings":
        mint_url = os.getenv("MINT_URL", "").strip().rstrip("/") or None

        return cls(
            mint_url=mint_url,
            mint_timeout_seconds=float(os.getenv("MINT_TIMEOUT_SECONDS", "5.0")),
            disk_mount_point=os.getenv("DISK_MOUNT_POINT", "/"),
            cpu_sample_interval=float(os.getenv("CPU_SAMPLE_INTERVAL", "0.1")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
