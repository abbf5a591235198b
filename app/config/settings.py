from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""  # anon key; user queries carry the caller's JWT on top of it
    supabase_service_role_key: Optional[str] = None  # Required for out-of-band role provisioning

    # Meta Graph API
    meta_graph_base_url: str = "https://graph.facebook.com"
    meta_api_version: str = "v18.0"
    meta_request_timeout: float = 10.0

    # Client database probe
    probe_debounce_seconds: float = 0.5

    # App
    app_name: str = "pixelhub-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    admin_redirect_path: str = "/dashboard"  # where non-admins are sent from admin views

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore"
    )


settings = Settings()
