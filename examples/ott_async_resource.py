import asyncio
import logging

from resourcemini import Resource, create_default_resource


async def detect_cloud_metadata():
    await asyncio.sleep(0.5)
    return {"cloud.provider": "aws", "cloud.region": "us-east-1"}


async def detect_host():
    await asyncio.sleep(0.1)
    raise ConnectionError("host metadata endpoint unreachable")


async def main():
    resource = (
        create_default_resource()
        .merge(Resource({}, detect_cloud_metadata()))
        .merge(Resource({}, detect_host()))
    )
    print("resolved:", resource.async_attributes_have_resolved(), resource.attributes)
    await resource.wait_for_async_attributes()
    print("resolved:", resource.async_attributes_have_resolved(), resource.attributes)


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    asyncio.run(main())
