"""
Configuration module for Thriphti.

Loads environment variables and provides configuration constants.
All sensitive values should be in .env file (never commit to git).
"""

import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_API_BASE_URL = "http://localhost:3000/api"


@dataclass
class SupabaseConfig:
    """Supabase connection configuration."""
    url: str
    key: str  # Service role key for server-side operations

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.key)

    @classmethod
    def from_env(cls) -> "SupabaseConfig":
        return cls(
            url=os.getenv("SUPABASE_URL", ""),
            key=os.getenv("SUPABASE_SERVICE_ROLE_KEY") or os.getenv("SUPABASE_KEY", ""),
        )


@dataclass
class ApiConfig:
    """REST backend the site reads events and stores from."""
    base_url: str = DEFAULT_API_BASE_URL

    @classmethod
    def from_env(cls) -> "ApiConfig":
        base_url = (
            os.getenv("THRIPHTI_API_BASE_URL")
            or os.getenv("VITE_API_BASE_URL")
            or DEFAULT_API_BASE_URL
        )
        return cls(base_url=base_url.rstrip("/"))


@dataclass
class IntegrationKeysConfig:
    """Third-party API keys checked by the admin utility endpoints."""
    openai_api_key: str = ""
    firecrawl_api_key: str = ""

    @classmethod
    def from_env(cls) -> "IntegrationKeysConfig":
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            firecrawl_api_key=os.getenv("FIRECRAWL_API_KEY", ""),
        )


@dataclass
class AppConfig:
    """Main application configuration."""
    default_city: str = "Dallas"

    # Outbound requests made by the utility endpoints
    feed_timeout: int = 10
    feed_user_agent: str = "Mozilla/5.0 (compatible; Thriphti-RSS-Tester/1.0)"
    validation_cache_seconds: int = 3600

    @classmethod
    def from_env(cls) -> "AppConfig":
        return cls(
            default_city=os.getenv("THRIPHTI_DEFAULT_CITY", "Dallas"),
            feed_timeout=int(os.getenv("THRIPHTI_FEED_TIMEOUT", "10")),
            validation_cache_seconds=int(os.getenv("THRIPHTI_VALIDATION_CACHE_SECONDS", "3600")),
        )


# Global configuration instances (lazy loaded)
_supabase_config: Optional[SupabaseConfig] = None
_api_config: Optional[ApiConfig] = None
_keys_config: Optional[IntegrationKeysConfig] = None
_app_config: Optional[AppConfig] = None


def get_supabase_config() -> SupabaseConfig:
    """Get Supabase configuration (cached)."""
    global _supabase_config
    if _supabase_config is None:
        _supabase_config = SupabaseConfig.from_env()
    return _supabase_config


def get_api_config() -> ApiConfig:
    """Get REST API configuration (cached)."""
    global _api_config
    if _api_config is None:
        _api_config = ApiConfig.from_env()
    return _api_config


def get_keys_config() -> IntegrationKeysConfig:
    """Get integration key configuration (cached)."""
    global _keys_config
    if _keys_config is None:
        _keys_config = IntegrationKeysConfig.from_env()
    return _keys_config


def get_app_config() -> AppConfig:
    """Get app configuration (cached)."""
    global _app_config
    if _app_config is None:
        _app_config = AppConfig.from_env()
    return _app_config


def reset_config() -> None:
    """Drop cached configs so the next access re-reads the environment."""
    global _supabase_config, _api_config, _keys_config, _app_config
    _supabase_config = None
    _api_config = None
    _keys_config = None
    _app_config = None
