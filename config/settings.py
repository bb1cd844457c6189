from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Hosted backend (defaults match `supabase start` for local dev)
    SUPABASE_URL: str = "http://localhost:54321"
    SUPABASE_ANON_KEY: str = ""
    HTTP_TIMEOUT_SECONDS: float = 10.0

    # Client-local storage (userEmail cache + persisted refresh token)
    LOCAL_STORAGE_PATH: Path = Path.home() / ".campus_mart" / "local_storage.json"

    # OAuth / magic-link callbacks land on this client
    OAUTH_REDIRECT_URL: str = "http://localhost:8000/api/v1/auth/callback"
    OAUTH_DOMAIN_HINT: str = "*"  # forwarded to Google as `hd`

    # Catalog
    CURRENCY_SYMBOL: str = "₹"
    PLACEHOLDER_IMAGE: str = "/placeholder.svg"

    # App
    APP_NAME: str = "Campus Mart"
    DEBUG: bool = False  # Safe default; set DEBUG=True in .env for local dev


settings = Settings()
