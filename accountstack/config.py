"""Configuration management using Pydantic Settings"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "accountstack"
    services: str = "accounts,transactions,insights"  # Routers to mount, comma separated
    log_level: str = "INFO"

    # Snapshot
    data_path: str = "data/seed"

    # Auth
    jwt_secret: str = "dev-secret-key-change-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 24 * 60
    auth_password: str = "demo123"  # Shared demo password for every user
    bcrypt_rounds: int = 12
    admin_token: Optional[str] = None

    # Feature flag overrides (FEATURE_* environment variables)
    feature_mask_amounts: bool = False
    feature_local_currency: bool = True
    feature_advanced_filters: bool = False
    feature_insights_v2: bool = False
    feature_alerts_enabled: bool = True

    @property
    def enabled_services(self) -> List[str]:
        return [name.strip() for name in self.services.split(",") if name.strip()]


settings = Settings()
