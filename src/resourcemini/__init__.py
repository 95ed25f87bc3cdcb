from resourcemini.__about__ import __version__
from resourcemini.resource import Resource, create_default_resource, parse_resource_attributes
from resourcemini.sdk import SDK_INFO, default_service_name

__all__ = [
    "SDK_INFO",
    "Resource",
    "__version__",
    "create_default_resource",
    "default_service_name",
    "parse_resource_attributes",
]
