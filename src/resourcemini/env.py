"""Environment variables that shape the default Resource.

OTEL_SERVICE_NAME sets service.name; when unset the SDK falls back to
"unknown_service:<executable>". OTEL_RESOURCE_ATTRIBUTES holds extra
attributes as key1=value1,key2=value2 and is parsed by
resourcemini.resource.parse_resource_attributes.

Tests pass a plain dict instead of os.environ:

    config = Config(Env({"OTEL_SERVICE_NAME": "checkout"}))
    resource = create_default_resource(config)
"""

import os
from typing import Optional

OTEL_SERVICE_NAME = "OTEL_SERVICE_NAME"
OTEL_RESOURCE_ATTRIBUTES = "OTEL_RESOURCE_ATTRIBUTES"


class Env:
    """Read-only view over os.environ or a dict standing in for it."""

    def __init__(self, store: Optional[dict] = None):
        self._store = store if store is not None else os.environ

    def get(self, key: str, default: str = "") -> str:
        return self._store.get(key, default)


class Config:
    """Resource settings loaded from the environment at construction time.

    An empty service_name means OTEL_SERVICE_NAME was not set.
    """

    def __init__(self, env: Optional[Env] = None):
        if env is None:
            env = Env()

        self.service_name = env.get(OTEL_SERVICE_NAME, "").strip()
        self.resource_attributes = env.get(OTEL_RESOURCE_ATTRIBUTES, "")

    def as_dict(self) -> dict:
        """Return all configuration values as a dictionary."""
        return {
            "service_name": self.service_name,
            "resource_attributes": self.resource_attributes,
        }

    def __repr__(self) -> str:
        return f"Config({self.as_dict()})"
