"""
Donation Platforms

Webhook source adapters, listed in detection priority order.
"""

from collections.abc import Mapping
from typing import Any

from .bagibagi import BagiBagiPlatform
from .base import BasePlatform, DonationEvent, Platform
from .saweria import SaweriaPlatform

# Bagi Bagi goes first: its payloads may also carry Saweria-like fields
PLATFORMS: list[BasePlatform] = [BagiBagiPlatform(), SaweriaPlatform()]

# Listed in Platform declaration order, independent of detection priority
SUPPORTED_PLATFORMS = ", ".join(
    p.display_name for p in sorted(PLATFORMS, key=lambda p: list(Platform).index(p.platform))
)


def detect_platform(payload: Mapping[str, Any], headers: Mapping[str, str]) -> BasePlatform | None:
    """Return the first platform whose rules match, or None if unrecognized."""
    for platform in PLATFORMS:
        if platform.matches(payload, headers):
            return platform
    return None


__all__ = [
    "BasePlatform",
    "BagiBagiPlatform",
    "DonationEvent",
    "Platform",
    "SaweriaPlatform",
    "PLATFORMS",
    "SUPPORTED_PLATFORMS",
    "detect_platform",
]
