import os
from dataclasses import dataclass
from typing import List
from urllib.parse import quote_plus

TRUTHY = {"1", "true", "yes", "on"}
DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://localhost:4173,http://localhost:3000"


@dataclass(frozen=True)
class Settings:
    host: str
    port: int
    database_url: str
    cors_origins: List[str]
    auto_create_tables: bool
    seed_on_startup: bool
    log_level: str


def _build_database_url(
    mysql_host: str,
    mysql_port: int,
    mysql_user: str,
    mysql_password: str,
    mysql_database: str,
) -> str:
    password = quote_plus(mysql_password)
    return (
        "mysql+pymysql://"
        f"{mysql_user}:{password}@{mysql_host}:{mysql_port}/{mysql_database}"
        "?charset=utf8mb4"
    )


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in TRUTHY


def _parse_origins(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_settings() -> Settings:
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        mysql_host = os.getenv("MYSQL_HOST", "")
        if mysql_host:
            database_url = _build_database_url(
                mysql_host=mysql_host,
                mysql_port=int(os.getenv("MYSQL_PORT", "3306")),
                mysql_user=os.getenv("MYSQL_USER", "app_user"),
                mysql_password=os.getenv("MYSQL_PASSWORD", "app_pass"),
                mysql_database=os.getenv("MYSQL_DATABASE", "app_db"),
            )
        else:
            database_url = f"sqlite:///{os.getenv('SQLITE_PATH', 'readability.db')}"

    return Settings(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "") or "8080"),
        database_url=database_url,
        cors_origins=_parse_origins(os.getenv("CORS_ORIGINS", "") or DEFAULT_CORS_ORIGINS),
        auto_create_tables=_env_flag("AUTO_CREATE_TABLES", "1"),
        seed_on_startup=_env_flag("SEED_ON_STARTUP", "1"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
