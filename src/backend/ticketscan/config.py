import logging

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    APP_NAME: str = "TicketScan"
    DEBUG: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"

    # Ticket checks
    TICKET_KEYWORD_THRESHOLD: int = 2  # keywords needed to call a text a movie ticket
    MIN_SUPPORTING_FIELDS: int = 3  # populated fields besides the title for a usable ticket

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()


def configure_logging(level: str = None) -> None:
    """Apply LOG_LEVEL (DEBUG forces debug output) to the root logger."""
    if level is None:
        level = "DEBUG" if settings.DEBUG else settings.LOG_LEVEL
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
