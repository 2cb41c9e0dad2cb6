"""Client configuration resolved from the environment."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Mapping, Optional

from .utils.coerce import to_float, to_str

DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class ClientConfig:
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", normalize_base_url(self.base_url))

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"


@dataclass(frozen=True)
class ContactInfo:
    """Phone number shown on the call-to-action links."""

    phone: str = ""

    @property
    def tel_href(self) -> Optional[str]:
        number = re.sub(r"[^\d+]", "", self.phone)
        return f"tel:{number}" if number else None


def normalize_base_url(value: Optional[str]) -> str:
    value = (value or "").strip()
    if not value:
        return DEFAULT_BASE_URL
    return value.rstrip("/")


def load_config(environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
    """Build a ClientConfig from ``API_BASE_URL`` and ``API_TIMEOUT``."""

    env = os.environ if environ is None else environ
    timeout = to_float(env.get("API_TIMEOUT"))
    return ClientConfig(
        base_url=env.get("API_BASE_URL", DEFAULT_BASE_URL),
        timeout=timeout if timeout and timeout > 0 else DEFAULT_TIMEOUT,
    )


def load_contact(environ: Optional[Mapping[str, str]] = None) -> ContactInfo:
    env = os.environ if environ is None else environ
    return ContactInfo(phone=to_str(env.get("CONTACT_PHONE")))


__all__ = ["ClientConfig", "ContactInfo", "DEFAULT_BASE_URL", "DEFAULT_TIMEOUT", "load_config", "load_contact", "normalize_base_url"]
