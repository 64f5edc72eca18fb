"""Server configuration."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = True

    # Identity this service presents to the Hub on start_game
    service_id: str = "stellar-dynasties"
    admin_identity: str = "admin"

    # Game Hub (empty endpoint -> notifications are only logged)
    hub_endpoint: str = ""
    hub_timeout: float = 10.0

    # Authorization (empty secret -> allow-all gate, debug only)
    auth_secret: str = ""

    # Game defaults
    session_ttl_seconds: int = 30 * 24 * 60 * 60
    max_rounds: int = 3
    starting_prestige: int = 50

    class Config:
        env_prefix = "INTRIGUE_"


settings = Settings()
