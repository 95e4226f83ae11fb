"""
Application configuration using Pydantic settings.

Configuration is loaded from environment variables with sensible defaults.
Using Pydantic's BaseSettings means we get:
- Type validation at startup (fail fast if config is wrong)
- Documentation of what's required vs optional
- Easy testing with different configurations

AWS credentials are deliberately absent: boto3 reads them from its
default credential chain (environment, shared config, instance role).

Mock mode enables local development without an S3 bucket.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.keys import KeyLayout


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Defaults reproduce the single-bucket deployment this gateway was
    first written for.
    """

    # API Configuration
    api_title: str = "GPS Data Gateway"
    api_version: str = "0.1.0"

    # Server
    host: str = Field(
        default="0.0.0.0",
        description="Interface uvicorn binds to"
    )
    port: int = Field(
        default=8090,
        description="TCP port uvicorn listens on"
    )

    # S3 Configuration
    bucket_name: str = Field(
        default="srihari03",
        description="Bucket holding the GPS data objects"
    )
    aws_region: str = Field(
        default="ap-south-1",
        description="Region of the bucket"
    )
    s3_endpoint_url: Optional[str] = Field(
        default=None,
        description="Custom S3 endpoint (MinIO, LocalStack). Leave unset for AWS."
    )
    s3_connect_timeout: float = Field(
        default=5.0,
        description="Seconds to wait for a connection to the object store"
    )
    s3_read_timeout: float = Field(
        default=60.0,
        description="Seconds to wait on a socket read from the object store"
    )
    storage_mock_mode: bool = Field(
        default=False,
        description="Use an in-memory object store instead of S3. Enables local dev without AWS."
    )
    buffer_dir: Optional[str] = Field(
        default=None,
        description="Directory for per-request download buffers. Defaults to the system temp dir."
    )

    # Key layout
    key_prefix: str = Field(
        default="gps_data-20241008T164836Z-001",
        description="First segment of every object key"
    )
    key_dataset: str = Field(
        default="gps_data",
        description="Dataset segment of every object key"
    )
    key_environment: str = Field(
        default="dev",
        description="Environment segment of every object key"
    )
    key_filename: str = Field(
        default="gps_data.json",
        description="Object name at the leaf of every key"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @property
    def key_layout(self) -> KeyLayout:
        """Literal key segments as the core expects them."""
        return KeyLayout(
            prefix=self.key_prefix,
            dataset=self.key_dataset,
            environment=self.key_environment,
            filename=self.key_filename,
        )

    def validate_required_fields(self) -> list[str]:
        """
        Validate that required fields are set based on mock mode settings.

        Returns list of missing required fields.
        This is separate from Pydantic validation because requirements
        depend on whether we're in mock mode.
        """
        missing = []

        if not self.bucket_name:
            missing.append("BUCKET_NAME")

        # Region only matters when talking to a real store
        if not self.storage_mock_mode and not self.aws_region:
            missing.append("AWS_REGION")

        for name in ("key_prefix", "key_dataset", "key_environment", "key_filename"):
            if not getattr(self, name):
                missing.append(name.upper())

        return missing


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache means we only load settings once per process.
    For tests, you can call get_settings.cache_clear() to reset.
    """
    return Settings()
