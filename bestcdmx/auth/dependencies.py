from __future__ import annotations

import hmac
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
from fastapi import Header, HTTPException

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class AdminConfig:
    admin_token: str = os.getenv("BESTCDMX_ADMIN_TOKEN", "")


DEFAULT_ADMIN_CONFIG = AdminConfig()

_config = DEFAULT_ADMIN_CONFIG


def configure_admin(config: AdminConfig) -> None:
    global _config
    _config = config


def require_admin(x_admin_token: str | None = Header(default=None)) -> str:
    """Raise 401 if no token is sent, 403 if it does not match the configured one."""
    if not x_admin_token:
        raise HTTPException(status_code=401, detail="Not authenticated")
    expected = _config.admin_token
    if not expected or not hmac.compare_digest(x_admin_token.encode(), expected.encode()):
        raise HTTPException(status_code=403, detail="Admin access required")
    return x_admin_token
