"""The Resource entity and resource creation utilities."""

from __future__ import annotations

import asyncio
import logging
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Optional

from opentelemetry.semconv.attributes.service_attributes import SERVICE_NAME

from resourcemini.env import Config
from resourcemini.sdk import SDK_INFO, default_service_name
from resourcemini.types import Attributes, merge_attributes

_pylogger = logging.getLogger(__package__)


class Resource:
    """Describes the entity (service, host, process) for which telemetry is produced.

    Attributes are either known up front or supplied later by an awaitable,
    e.g. the result of metadata detection. When the awaitable settles, its
    attributes are merged over the synchronous ones. A failed awaitable is
    logged and treated as having resolved to no attributes.

    The awaitable is driven by a task created once: immediately if an event
    loop is running at construction time, otherwise on the first call to
    wait_for_async_attributes().
    """

    def __init__(
        self,
        attributes: Optional[Attributes] = None,
        pending_attributes: Optional[Awaitable[Attributes]] = None,
        schema_url: str = "",
    ):
        self._attributes = attributes if attributes is not None else {}
        self._schema_url = schema_url
        self._pending = pending_attributes
        self._settle_task: Optional[asyncio.Future] = None
        self._async_attributes_have_resolved = pending_attributes is None
        if pending_attributes is not None and _loop_is_running():
            self._get_settle_task()

    @classmethod
    def empty(cls) -> Resource:
        """Return the shared attribute-less Resource. Do not mutate its attributes."""
        return _EMPTY_RESOURCE

    @classmethod
    def default(cls, config: Optional[Config] = None) -> Resource:
        """Return a Resource that identifies the service and the SDK in use."""
        return cls({SERVICE_NAME: default_service_name(config), **SDK_INFO})

    @property
    def attributes(self) -> Attributes:
        return self._attributes

    def get_attributes(self) -> Attributes:
        return self._attributes

    def get_schema_url(self) -> str:
        return self._schema_url

    def async_attributes_have_resolved(self) -> bool:
        """Check whether async attributes have been merged in, without waiting.

        Returns True if no pending attributes were supplied, or once they have
        settled (successfully or not).
        """
        return self._async_attributes_have_resolved

    async def wait_for_async_attributes(self) -> None:
        """Wait until pending attributes have been merged into this Resource.

        Exporters can use this to hold off until resource detection has
        finished. Never raises on a failed computation. Cancelling the wait
        (e.g. on timeout) leaves the resolution running.
        """
        if not self._async_attributes_have_resolved:
            await self._settled()

    def merge(self, other: Optional[Resource]) -> Resource:
        """Return a new Resource combining this one with other.

        On attribute collision other takes precedence, both for the
        synchronous attributes and for the pending ones. Neither input is
        modified. Returns self when other is None.

        Only unresolved pending attributes carry over: once a side has
        resolved, its async values are plain attributes and lose to other's.
        """
        if other is None:
            return self

        attributes = merge_attributes(self._attributes, other.get_attributes())
        schema_url = other.get_schema_url() or self._schema_url

        this_pending = not self._async_attributes_have_resolved
        other_pending = not other.async_attributes_have_resolved()
        if this_pending and other_pending:
            pending = _Deferred(_join_settled, self, other)
        elif this_pending:
            pending = _Deferred(self._settled)
        elif other_pending:
            pending = _Deferred(other._settled)
        else:
            pending = None

        return Resource(attributes, pending, schema_url)

    def _settled(self) -> asyncio.Future:
        # shielded so a cancelled waiter does not cancel the resolution
        return asyncio.shield(self._get_settle_task())

    def _get_settle_task(self) -> asyncio.Future:
        if self._settle_task is None:
            self._settle_task = asyncio.ensure_future(self._settle(self._pending))
            self._pending = None
        return self._settle_task

    async def _settle(self, pending: Awaitable[Attributes]) -> Attributes:
        try:
            resolved = (await pending) or {}
        except Exception as e:
            _pylogger.debug("The resource's async attributes failed to resolve: %s", e)
            resolved = {}
        else:
            self._attributes = merge_attributes(self._attributes, resolved)
        self._async_attributes_have_resolved = True
        return resolved

    def __getstate__(self):
        return {"schema_url": self._schema_url, "attributes": dict(self._attributes)}

    def __setstate__(self, state):
        self._schema_url = state["schema_url"]
        self._attributes = state["attributes"]
        self._pending = None
        self._settle_task = None
        self._async_attributes_have_resolved = True

    def __repr__(self) -> str:
        return (
            f"Resource(attributes={dict(self._attributes)}, schema_url='{self._schema_url}', "
            f"resolved={self._async_attributes_have_resolved})"
        )


_EMPTY_RESOURCE = Resource(MappingProxyType({}))


class _Deferred:
    """Awaitable that calls its factory only once it is awaited."""

    def __init__(self, factory: Callable[..., Awaitable[Any]], *args):
        self._factory = factory
        self._args = args

    def __await__(self):
        return self._factory(*self._args).__await__()


async def _join_settled(first: Resource, second: Resource) -> dict:
    first_attributes, second_attributes = await asyncio.gather(first._settled(), second._settled())
    return merge_attributes(first_attributes, second_attributes)


def _loop_is_running() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


def parse_resource_attributes(env_value: Optional[str]) -> dict:
    """Parse OTEL_RESOURCE_ATTRIBUTES format: key1=value1,key2=value2"""
    if not env_value:
        return {}
    attributes = {}
    for pair in env_value.split(","):
        pair = pair.strip()
        if not pair:
            continue
        if "=" not in pair:
            _pylogger.debug("Skipping resource attribute without '=': %s", pair)
            continue
        key, value = pair.split("=", 1)
        attributes[key.strip()] = value.strip()
    return attributes


def create_default_resource(config: Optional[Config] = None) -> Resource:
    """Create a resource with default SDK attributes and OTEL_RESOURCE_ATTRIBUTES.

    SDK attributes and OTEL_SERVICE_NAME take precedence over the env attributes.
    """
    if config is None:
        config = Config()
    env_resource = Resource(parse_resource_attributes(config.resource_attributes))
    return env_resource.merge(Resource.default(config))
