import os
from typing import Optional
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel


load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    # Object storage backend: "r2", "supabase" or "memory"
    storage_backend: str = os.getenv("STORAGE_BACKEND", "r2").lower()

    # Cloudflare R2 (S3-compatible API)
    r2_account_id: Optional[str] = os.getenv("R2_ACCOUNT_ID")
    r2_access_key_id: Optional[str] = os.getenv("R2_ACCESS_KEY_ID")
    r2_secret_access_key: Optional[str] = os.getenv("R2_SECRET_ACCESS_KEY")
    r2_bucket_name: Optional[str] = os.getenv("R2_BUCKET_NAME")
    r2_endpoint_url: Optional[str] = os.getenv("R2_ENDPOINT_URL")

    @property
    def r2_endpoint(self) -> Optional[str]:
        """Explicit endpoint wins, otherwise derived from the account id."""
        if self.r2_endpoint_url:
            return self.r2_endpoint_url
        if self.r2_account_id:
            return f"https://{self.r2_account_id}.r2.cloudflarestorage.com"
        return None

    # Supabase Storage
    supabase_url: str | None = os.getenv("SUPABASE_URL")
    supabase_service_role_key: str | None = os.getenv("SUPABASE_SERVICE_ROLE_KEY")
    supabase_storage_bucket: str = os.getenv("SUPABASE_STORAGE_BUCKET", "site-data")

    # Published snapshot
    published_data_key: str = os.getenv("PUBLISHED_DATA_KEY", "site-data.json")
    snapshot_cache_control: str = os.getenv("SNAPSHOT_CACHE_CONTROL", "max-age=300")
    read_cache_max_age: int = int(os.getenv("READ_CACHE_MAX_AGE", "60"))

    # Validation policy
    price_warning_threshold: float = float(os.getenv("PRICE_WARNING_THRESHOLD", "1000000"))
    orphan_product_policy: str = os.getenv("ORPHAN_PRODUCT_POLICY", "warn").lower()
    block_on_validation_errors: bool = _env_bool("BLOCK_ON_VALIDATION_ERRORS", "true")

    # Publish history ledger
    history_backend: str = os.getenv("HISTORY_BACKEND", "redis").lower()
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    publish_history_key: str = os.getenv("PUBLISH_HISTORY_KEY", "publish_history")
    publish_history_max_records: int = int(os.getenv("PUBLISH_HISTORY_MAX_RECORDS", "50"))

    # Comma-separated origins allowed to call the API
    cors_allow_origins: str = os.getenv("CORS_ALLOW_ORIGINS", "*")

    # Storefront client
    published_data_url: str = os.getenv(
        "PUBLISHED_DATA_URL", "http://localhost:8000/api/get-published-data"
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = Settings()
