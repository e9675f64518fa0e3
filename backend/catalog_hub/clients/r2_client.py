import logging

import boto3
from botocore.config import Config

from catalog_hub.core.config import Settings
from catalog_hub.core.exceptions import StorageConfigurationError

logger = logging.getLogger("r2_client")


class R2Client:
    """Cloudflare R2 client wrapper over the S3-compatible boto3 API."""

    def __init__(self, settings: Settings) -> None:
        self._endpoint = settings.r2_endpoint
        self._access_key_id = settings.r2_access_key_id
        self._secret_access_key = settings.r2_secret_access_key
        self._bucket = settings.r2_bucket_name
        self._client = None

    @property
    def configured(self) -> bool:
        return all(
            (self._endpoint, self._access_key_id, self._secret_access_key, self._bucket)
        )

    def get_client(self):
        """Get or create the boto3 S3 client bound to the R2 endpoint."""
        if not self.configured:
            raise StorageConfigurationError(
                "R2 bucket binding not configured. Set R2_ACCOUNT_ID (or R2_ENDPOINT_URL), "
                "R2_ACCESS_KEY_ID, R2_SECRET_ACCESS_KEY and R2_BUCKET_NAME."
            )
        if self._client is None:
            self._client = boto3.client(
                "s3",
                endpoint_url=self._endpoint,
                aws_access_key_id=self._access_key_id,
                aws_secret_access_key=self._secret_access_key,
                region_name="auto",
                config=Config(signature_version="s3v4", retries={"max_attempts": 3}),
            )
            logger.info("r2 client initialized endpoint=%s bucket=%s", self._endpoint, self._bucket)
        return self._client

    @property
    def client(self):
        """Property accessor for the boto3 client."""
        return self.get_client()

    @property
    def bucket(self) -> str:
        if not self._bucket:
            raise StorageConfigurationError("R2_BUCKET_NAME is not set")
        return self._bucket
