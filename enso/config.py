"""Configuration loaded from the environment."""

__version__ = "0.1.0"

import os
import sys
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

_stderr_print = lambda *a, **kw: print(*a, **kw, file=sys.stderr)

DEFAULT_API_ADDRESS = "https://api.enso.finance"

SUPPORTED_API_VERSIONS = ("v1",)
API_VERSION = os.getenv("ENSO_API_VERSION", "v1").strip().lower()
if API_VERSION not in SUPPORTED_API_VERSIONS:
    _stderr_print(f"Unsupported ENSO_API_VERSION={API_VERSION!r}, falling back to 'v1'")
    API_VERSION = "v1"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        _stderr_print(f"Invalid {name}={raw!r}, falling back to {default}")
        return default


CONFIG = {
    "port": _int_env("PORT", 3000),
    "api_key": os.getenv("ENSO_API_KEY", ""),
    "api_address": os.getenv("ENSO_API_ADDRESS", DEFAULT_API_ADDRESS).rstrip("/"),
    "api_version": API_VERSION,
    # Chain used until a caller selects another network
    "default_chain_id": _int_env("ENSO_CHAIN_ID", 1),
    # Sender address for bundle submission
    "from_address": os.getenv("ENSO_FROM_ADDRESS", ""),
}


@dataclass
class AppConfig:
    """Typed view of CONFIG."""

    port: int = 3000
    api_key: str = ""
    api_address: str = DEFAULT_API_ADDRESS
    api_version: str = "v1"
    default_chain_id: int = 1
    from_address: str = ""

    @property
    def api_url(self) -> str:
        return f"{self.api_address}/api/{self.api_version}"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create AppConfig from environment variables."""
        return cls(
            port=CONFIG["port"],
            api_key=CONFIG["api_key"],
            api_address=CONFIG["api_address"],
            api_version=CONFIG["api_version"],
            default_chain_id=CONFIG["default_chain_id"],
            from_address=CONFIG["from_address"],
        )
