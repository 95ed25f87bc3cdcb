"""SDK identity attributes and the fallback service name."""

from __future__ import annotations

import os
import sys
from typing import Optional

from opentelemetry.semconv.attributes.telemetry_attributes import (
    TELEMETRY_SDK_LANGUAGE,
    TELEMETRY_SDK_NAME,
    TELEMETRY_SDK_VERSION,
)

from resourcemini.__about__ import __version__
from resourcemini.env import Config

UNKNOWN_SERVICE = "unknown_service"

SDK_INFO = {
    TELEMETRY_SDK_LANGUAGE: "python",
    TELEMETRY_SDK_NAME: "resourcemini",
    TELEMETRY_SDK_VERSION: __version__,
}


def default_service_name(config: Optional[Config] = None) -> str:
    """Return OTEL_SERVICE_NAME if set, else "unknown_service:<executable name>"."""
    if config is None:
        config = Config()
    if config.service_name:
        return config.service_name
    executable = os.path.basename(sys.executable or "")
    if executable:
        return f"{UNKNOWN_SERVICE}:{executable}"
    return UNKNOWN_SERVICE
