# billy_bingo/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "Billy Bingo API"
    env: str = os.getenv("ENV", "dev")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3001"))

    # Every REST route lives under this prefix
    api_prefix: str = os.getenv("API_PREFIX", "/api")

    # CORS origins for frontend (comma separated, "*" allows everything)
    CORS_ORIGINS: list[str] = [
        o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
    ]

    # Database (Tortoise ORM connection URL)
    database_url: str = os.getenv("DATABASE_URL", "sqlite://billy_bingo.sqlite3")
    # Create missing tables on startup; turn off when Aerich manages the schema
    generate_schemas: bool = _env_flag("GENERATE_SCHEMAS", "true")

    # setlist.fm API Settings
    setlist_api_key: str | None = os.getenv("SETLIST_API_KEY")
    setlist_api_base: str = os.getenv("SETLIST_API_BASE", "https://api.setlist.fm/rest/1.0")
    setlist_artist_mbid: str = os.getenv("SETLIST_ARTIST_MBID", "640db492-34c4-47df-be14-96e2cd4b9fe4")
    # Pause between page requests when aggregating songs (seconds)
    setlist_page_delay: float = float(os.getenv("SETLIST_PAGE_DELAY", "0.1"))

    # Unauthenticated /users CRUD routes (admin-style); disable in production
    enable_user_admin_routes: bool = _env_flag("ENABLE_USER_ADMIN_ROUTES", "true")


settings = Settings()  # Instantiate configuration
