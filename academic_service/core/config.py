import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if not value:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]


APP_ENV = os.getenv("APP_ENV", "development")
APP_NAME = os.getenv("APP_NAME", "Academic Service API")
DEBUG = _get_bool(os.getenv("DEBUG"), default=False)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./academic.db")
DATABASE_ECHO = _get_bool(os.getenv("DATABASE_ECHO"), default=False)

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", "1440"))

JWT_MIN_SECRET_BYTES = 32

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

CORS_ORIGINS = _get_list(os.getenv("CORS_ORIGINS"), ["http://localhost:4200"])


def validate_runtime_config() -> None:
    if APP_ENV.lower() == "production" and JWT_SECRET_KEY == "change-me":
        raise RuntimeError("JWT_SECRET_KEY must be set in production.")
    if JWT_EXPIRES_MINUTES <= 0:
        raise RuntimeError("JWT_EXPIRES_MINUTES must be a positive number of minutes.")
    if not 4 <= BCRYPT_ROUNDS <= 31:
        raise RuntimeError("BCRYPT_ROUNDS must be between 4 and 31.")
    if len(JWT_SECRET_KEY.encode("utf-8")) < JWT_MIN_SECRET_BYTES:
        logger.warning(
            "JWT_SECRET_KEY is shorter than %d bytes; set a longer secret outside development.",
            JWT_MIN_SECRET_BYTES,
        )


def configure_logging(level: str | None = None) -> None:
    level_name = (level or LOG_LEVEL or "INFO").upper()
    numeric_level = getattr(logging, level_name, None)
    if not isinstance(numeric_level, int):
        logger.warning("Invalid log level: %s, using INFO", level_name)
        numeric_level = logging.INFO

    logging.basicConfig(
        level=logging.DEBUG if DEBUG else numeric_level,
        format="%(asctime)s  %(levelname)-8s  %(name)s - %(message)s",
    )
