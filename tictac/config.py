"""
Configuration - Environment-driven settings.

    TICTAC_ENV                 development | production
    ALLOWED_ORIGINS            comma-separated CORS origins
    TICTAC_OPPONENT_DELAY_MS   opponent "thinking" time
    TICTAC_SESSION_MAX_AGE     seconds before an idle session is reaped
    TICTAC_LOG_LEVEL           logging level name
"""

from __future__ import annotations
from dataclasses import dataclass, field
import os


@dataclass
class Settings:
    env: str = "development"
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])
    opponent_delay_ms: int = 500
    session_max_age: int = 3600
    log_level: str = "INFO"

    @property
    def opponent_delay(self) -> float:
        """Delay in seconds, as the scheduler expects it."""
        return self.opponent_delay_ms / 1000

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            env=os.getenv("TICTAC_ENV", "development"),
            allowed_origins=os.getenv("ALLOWED_ORIGINS", "*").split(","),
            opponent_delay_ms=int(os.getenv("TICTAC_OPPONENT_DELAY_MS", "500")),
            session_max_age=int(os.getenv("TICTAC_SESSION_MAX_AGE", "3600")),
            log_level=os.getenv("TICTAC_LOG_LEVEL", "INFO").upper(),
        )
