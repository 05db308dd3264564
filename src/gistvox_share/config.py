"""Configuration settings for the Gistvox share service."""

from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_BOT_TOKENS = [
    "bot",
    "crawler",
    "spider",
    "crawling",
    "facebook",
    "twitter",
    "linkedin",
    "whatsapp",
    "telegram",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Backend (Supabase)
    supabase_url: str | None = Field(default=None, description="Backend base URL")
    supabase_anon_key: str | None = Field(default=None, description="Backend API key")
    storage_bucket: str = Field(default="gistvox-public", description="Public storage bucket")

    # Deep links
    branch_domain: str = Field(default="gistvox.app.link", description="Deep-link domain")

    # Preview images (htmlcsstoimage.com)
    hcti_user_id: str | None = Field(default=None, description="Image API user id")
    hcti_api_key: str | None = Field(default=None, description="Image API key")
    hcti_endpoint: str = Field(default="https://hcti.io/v1/image", description="Image API endpoint")
    og_cache_control: str = Field(
        default="public, max-age=86400, s-maxage=604800, stale-while-revalidate=86400",
        description="Cache-Control for generated preview image redirects",
    )
    og_fallback_cache_control: str = Field(
        default="public, max-age=3600",
        description="Cache-Control for fallback preview image redirects",
    )

    # Public site
    public_base_url: str | None = Field(default=None, description="Canonical base URL of this service")
    site_url: str = Field(default="https://gistvox.com", description="Main site")
    favicon_url: str = Field(default="https://gistvox.com/favicon.ico", description="Favicon location")
    app_store_url: str = Field(default="https://apps.apple.com/app/gistvox/id6751720190")
    play_store_url: str = Field(default="https://play.google.com/store/apps/details?id=com.gistvox.app")
    twitter_site: str = Field(default="@gistvox", description="Twitter handle for cards")
    facebook_app_id: str | None = Field(default="1571474837592831", description="fb:app_id meta value")

    # Rendering
    bot_user_agent_tokens: list[str] = Field(
        default_factory=lambda: list(DEFAULT_BOT_TOKENS),
        description="User-Agent substrings treated as crawlers",
    )
    embed_theme: str = Field(default="mist", description="Default embed player theme")

    # Listen tracking
    listen_window_seconds: int = Field(default=21600, description="Per-session listen de-duplication window")
    session_cookie_name: str = Field(default="gv_sid", description="Session cookie name")
    session_cookie_secure: bool = Field(default=True, description="Mark the session cookie Secure")

    # Outbound HTTP
    http_timeout_seconds: float = Field(default=10.0, description="Timeout for backend and image API calls")

    # Runtime
    environment: str = Field(default="production", description="Deployment environment marker")

    # API settings
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=False, description="Emit JSON log lines")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def has_backend(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)

    @property
    def has_image_credentials(self) -> bool:
        return bool(self.hcti_user_id and self.hcti_api_key)

    @property
    def storage_public_url(self) -> str | None:
        """Base URL of the public storage bucket, if the backend is configured."""
        if not self.supabase_url:
            return None
        base = self.supabase_url.rstrip("/")
        return f"{base}/storage/v1/object/public/{self.storage_bucket}"

    @property
    def logo_url(self) -> str:
        if self.storage_public_url:
            return f"{self.storage_public_url}/gistvox-logo.png"
        return f"{self.site_url.rstrip('/')}/gistvox-logo.png"

    def config_status(self) -> dict[str, str]:
        """Report which externally supplied settings are present, never their values."""
        checks = {
            "SUPABASE_URL": self.supabase_url,
            "SUPABASE_ANON_KEY": self.supabase_anon_key,
            "BRANCH_DOMAIN": self.branch_domain,
            "HCTI_USER_ID": self.hcti_user_id,
            "HCTI_API_KEY": self.hcti_api_key,
        }
        return {name: "SET" if value else "MISSING" for name, value in checks.items()}


# Global settings instance
settings = Settings()
