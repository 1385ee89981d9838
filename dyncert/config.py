"""Settings for the demo server, read from the environment / .env file."""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from dyncert.common.protocol import KeyMaterial


class Settings(BaseModel):
    pub_key: Optional[str] = None
    priv_key: Optional[str] = None
    pub_key_file: Optional[str] = None
    priv_key_file: Optional[str] = None
    host: str = "0.0.0.0"
    port: int = 8443
    default_hostname: str = "localhost"
    cache: bool = False
    handshake_timeout: float = 10.0

    def key_material(self) -> KeyMaterial:
        return KeyMaterial(pub_key=self.pub_key, priv_key=self.priv_key,
                           pub_key_file=self.pub_key_file, priv_key_file=self.priv_key_file)


def load_settings(dotenv: bool = True) -> Settings:
    """Build Settings from DYNCERT_* variables (loading .env first if present)."""
    if dotenv:
        load_dotenv()
    return Settings(
        pub_key=os.getenv("DYNCERT_PUBKEY") or None,
        priv_key=os.getenv("DYNCERT_PRIVKEY") or None,
        pub_key_file=os.getenv("DYNCERT_PUBKEY_FILE") or None,
        priv_key_file=os.getenv("DYNCERT_PRIVKEY_FILE") or None,
        host=os.getenv("DYNCERT_HOST", "0.0.0.0"),
        port=int(os.getenv("DYNCERT_PORT", 8443)),
        default_hostname=os.getenv("DYNCERT_DEFAULT_HOSTNAME", "localhost"),
        cache=os.getenv("DYNCERT_CACHE", "").lower() in ("1", "true", "yes", "on"),
        handshake_timeout=float(os.getenv("DYNCERT_HANDSHAKE_TIMEOUT", 10)),
    )
