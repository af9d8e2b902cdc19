# eventhook/core/config.py
from __future__ import annotations
import os
from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

def _env_flag(name: str, default: bool = False) -> bool:
    v = os.getenv(name)
    return default if v is None else v.lower() in ("1", "true", "yes", "on")

def _ids_from_env(var: str) -> list[int]:
    raw = os.getenv(var, "").strip()
    if not raw:
        return []
    out: list[int] = []
    for part in raw.split(","):
        s = part.strip()
        if s.isdigit():
            out.append(int(s))
    return out

class Settings(BaseModel):
    token: str = Field(default_factory=lambda: os.getenv("DISCORD_BOT_TOKEN", ""))
    application_id: str = Field(default_factory=lambda: os.getenv("DISCORD_CLIENT_ID", ""))
    host: str = Field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = Field(default_factory=lambda: int(os.getenv("PORT", "5000") or 5000))
    notify_channel_id: int = Field(default_factory=lambda: int(os.getenv("NOTIFY_CHANNEL_ID", "0") or 0))
    test_guild_ids: list[int] = Field(default_factory=lambda: _ids_from_env("TEST_GUILD_IDS"))
    log_dir: str = Field(default_factory=lambda: os.getenv("LOG_DIR", "./logs"))
    debug: bool = Field(
        default_factory=lambda: _env_flag("DEBUG") or os.getenv("NODE_ENV", "") == "development"
    )

    def missing(self) -> list[str]:
        """Required variables absent from the environment."""
        out = []
        if not self.token:
            out.append("DISCORD_BOT_TOKEN")
        if not self.application_id:
            out.append("DISCORD_CLIENT_ID")
        return out

settings = Settings()
