
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = Field(default="Campus Coffee API", alias="APP_NAME")
    app_env: str = Field(default="development", alias="APP_ENV")
    app_port: int = Field(default=8080, alias="APP_PORT")
    frontend_url: str = Field(default="http://localhost:3000", alias="FRONTEND_URL")

    # Database (SQLite via aiosqlite for local dev, any async driver otherwise)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./campus_coffee.db",
        alias="DATABASE_URL",
    )

    # OpenStreetMap API
    osm_api_url: str = Field(
        default="https://www.openstreetmap.org/api/0.6", alias="OSM_API_URL",
    )
    osm_timeout: float = Field(default=10, alias="OSM_TIMEOUT")
    osm_user_agent: str = Field(default="campus-coffee/1.0", alias="OSM_USER_AGENT")

    # Destructive admin routes (DELETE /api/admin/pos) are off unless enabled
    admin_endpoints_enabled: bool = Field(
        default=False, alias="ADMIN_ENDPOINTS_ENABLED",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
        "extra": "ignore",
    }

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

settings = Settings()
