import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    HOST: str = os.getenv("REDIRECTOR_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("REDIRECTOR_PORT", 8000))
    DEVELOPMENT: bool = _env_bool("REDIRECTOR_DEVELOPMENT")
    CHECK_TIMEOUT_S: float = float(os.getenv("REDIRECTOR_CHECK_TIMEOUT_S", "5"))
    CHECK_WORKERS: int = int(os.getenv("REDIRECTOR_CHECK_WORKERS", 8))
    DATA_FILE: str = os.getenv("REDIRECTOR_DATA_FILE", "short-urls.csv")
    LOG_LEVEL: str = os.getenv("REDIRECTOR_LOG_LEVEL", "INFO").upper()


settings = Settings()
