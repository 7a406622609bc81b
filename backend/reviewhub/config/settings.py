from __future__ import annotations

"""backend/reviewhub/config/settings.py

Application configuration using environment-driven settings.

This module centralizes:
- database connection URL
- Celery / Redis configuration
- CORS configuration
- MinIO object storage and upload limits
- token / OTP lifetimes and the identity trust mode
- SMTP delivery for verification e-mails
"""
from functools import lru_cache
from typing import List

from pydantic import AnyHttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
  app_name: str = "reviewhub"
  environment: str = "development"
  log_level: str = "INFO"

  # Database
  database_url: str = "postgresql+psycopg2://postgres:postgres@db:5432/reviewhub"

  # Celery / Redis
  celery_broker_url: str = "redis://redis:6379/1"
  celery_result_backend: str = "redis://redis:6379/2"
  celery_task_always_eager: bool = False

  # Statsig (analytics events are disabled when no secret is set)
  statsig_server_secret: str | None = None

  # CORS
  allowed_origins: List[AnyHttpUrl] = [
      "http://localhost:3000",
      "http://127.0.0.1:3000",
      "http://localhost:5173",
      "http://127.0.0.1:5173",
  ]

  # MinIO object storage
  minio_endpoint: str = "minio:9000"
  minio_access_key: str = "minioadmin"
  minio_secret_key: str = "minioadmin"
  minio_secure: bool = False
  minio_bucket: str = "reviewhub"
  minio_public_base_url: str = "http://localhost:9000"

  # Uploads
  upload_tmp_dir: str = "/tmp"
  max_upload_mb: int = 10
  allowed_image_extensions: List[str] = [".jpg", ".jpeg", ".png", ".gif", ".webp"]

  # Auth
  jwt_secret: str = "change-me"
  jwt_algorithm: str = "HS256"
  access_token_ttl_minutes: int = 60 * 24
  otp_ttl_minutes: int = 10

  # When enabled, the `sub` header set by a verifying gateway is trusted
  # instead of the bearer token. Never enable for directly exposed deployments.
  trust_upstream_identity: bool = False

  # SMTP (verification e-mails are only logged when smtp_host is empty)
  smtp_host: str | None = None
  smtp_port: int = 587
  smtp_user: str | None = None
  smtp_password: str | None = None
  smtp_sender: str = "no-reply@reviewhub.local"

  # Listing
  default_page_size: int = 10
  max_page_size: int = 100

  model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
  """Return a cached Settings instance."""
  return Settings()
