"""
R2 store — Cloudflare R2 object operations through the S3 API.
Version: 1.0.0
"""

import logging
from typing import Optional, Union

from botocore.exceptions import BotoCoreError, ClientError

from catalog_hub.clients.r2_client import R2Client
from catalog_hub.core.exceptions import StorageError
from catalog_hub.db.base_store import (
    ObjectListing,
    ObjectStore,
    ObjectSummary,
    StoredObject,
    to_bytes,
)

logger = logging.getLogger("r2_store")

_NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


class R2ObjectStore(ObjectStore):
    """get / put / delete / list against an R2 bucket."""

    backend = "r2"

    def __init__(self, r2_client: R2Client) -> None:
        self._r2 = r2_client

    async def get(self, key: str) -> Optional[StoredObject]:
        client, bucket = self._r2.client, self._r2.bucket
        try:
            response = client.get_object(Bucket=bucket, Key=key)
            body = response["Body"].read()
        except ClientError as e:
            code = str(e.response.get("Error", {}).get("Code", ""))
            if code in _NOT_FOUND_CODES:
                logger.info("r2 get miss bucket=%s key=%s", bucket, key)
                return None
            logger.info("r2 error op=get key=%s detail=%s", key, str(e))
            raise StorageError(self.backend, str(e), key=key) from e
        except BotoCoreError as e:
            logger.info("r2 error op=get key=%s detail=%s", key, str(e))
            raise StorageError(self.backend, str(e), key=key) from e

        return StoredObject(
            key=key,
            body=body,
            content_type=response.get("ContentType"),
            cache_control=response.get("CacheControl"),
            uploaded=response.get("LastModified"),
        )

    async def put(
        self,
        key: str,
        body: Union[str, bytes],
        content_type: Optional[str] = None,
        cache_control: Optional[str] = None,
    ) -> None:
        client, bucket = self._r2.client, self._r2.bucket
        params = {"Bucket": bucket, "Key": key, "Body": to_bytes(body)}
        if content_type:
            params["ContentType"] = content_type
        if cache_control:
            params["CacheControl"] = cache_control
        try:
            client.put_object(**params)
        except (ClientError, BotoCoreError) as e:
            logger.info("r2 error op=put key=%s detail=%s", key, str(e))
            raise StorageError(self.backend, str(e), key=key) from e

    async def delete(self, key: str) -> None:
        client, bucket = self._r2.client, self._r2.bucket
        try:
            client.delete_object(Bucket=bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            logger.info("r2 error op=delete key=%s detail=%s", key, str(e))
            raise StorageError(self.backend, str(e), key=key) from e

    async def list(
        self, prefix: str = "", limit: int = 100, cursor: Optional[str] = None
    ) -> ObjectListing:
        client, bucket = self._r2.client, self._r2.bucket
        params = {"Bucket": bucket, "Prefix": prefix, "MaxKeys": limit}
        if cursor:
            params["ContinuationToken"] = cursor
        try:
            response = client.list_objects_v2(**params)
        except (ClientError, BotoCoreError) as e:
            logger.info("r2 error op=list prefix=%s detail=%s", prefix, str(e))
            raise StorageError(self.backend, str(e)) from e

        objects = [
            ObjectSummary(
                key=item["Key"],
                size=item.get("Size", 0),
                uploaded=item.get("LastModified"),
            )
            for item in response.get("Contents", [])
        ]
        truncated = bool(response.get("IsTruncated"))
        return ObjectListing(
            objects=objects,
            truncated=truncated,
            cursor=response.get("NextContinuationToken") if truncated else None,
        )
