"""
SDK Configuration - agent address, default token and transport settings read from the environment.
"""
import os
from typing import Optional


def _as_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


class SDKConfig:
    """Environment backed settings; every property is read on access."""

    @property
    def HTTP_ADDR(self) -> str:
        """Agent address, with or without scheme."""
        return os.getenv("CONSUL_HTTP_ADDR", "127.0.0.1:8500")

    @property
    def HTTP_SSL(self) -> bool:
        return _as_bool(os.getenv("CONSUL_HTTP_SSL", "false"))

    @property
    def HTTP_SSL_VERIFY(self) -> bool:
        return _as_bool(os.getenv("CONSUL_HTTP_SSL_VERIFY", "true"))

    @property
    def CACERT(self) -> Optional[str]:
        return os.getenv("CONSUL_CACERT")

    @property
    def HTTP_TOKEN(self) -> Optional[str]:
        token = os.getenv("CONSUL_HTTP_TOKEN")
        if token:
            return token
        token_file = os.getenv("CONSUL_HTTP_TOKEN_FILE")
        if token_file:
            with open(token_file) as f:
                return f.read().strip() or None
        return None

    @property
    def DATACENTER(self) -> Optional[str]:
        return os.getenv("CONSUL_DATACENTER") or None

    @property
    def TIMEOUT(self) -> float:
        return float(os.getenv("CONSUL_ACL_SDK_TIMEOUT", "30"))

    @property
    def BASE_URL(self) -> str:
        """HTTP_ADDR normalised to a URL; unix sockets are not supported here."""
        addr = self.HTTP_ADDR
        if addr.startswith("http://") or addr.startswith("https://"):
            return addr
        scheme = "https" if self.HTTP_SSL else "http"
        return f"{scheme}://{addr}"

    @property
    def VERIFY(self):
        """Value for httpx ``verify``: CA bundle path, or the verify flag."""
        if not self.HTTP_SSL_VERIFY:
            return False
        return self.CACERT or True

settings = SDKConfig()
