import os
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_LOG_FILE = "github_server.log"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


class StartupError(RuntimeError):
    """Raised when the server cannot be configured and must not start."""


@dataclass(frozen=True)
class Settings:
    token: str
    api_url: str = DEFAULT_API_URL
    timeout: float = 30.0
    log_file: str = DEFAULT_LOG_FILE
    log_level: str = "INFO"

    def __repr__(self) -> str:
        # keep the credential out of logs and tracebacks
        return (
            f"Settings(token='***', api_url={self.api_url!r}, timeout={self.timeout!r}, "
            f"log_file={self.log_file!r}, log_level={self.log_level!r})"
        )


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Read settings from the environment (and a local .env file).

    GITHUB_TOKEN is required; GH_TOKEN is accepted as a fallback.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    token = environ.get("GITHUB_TOKEN") or environ.get("GH_TOKEN")
    if not token:
        raise StartupError("GITHUB_TOKEN environment variable is required")

    raw_timeout = environ.get("GH_MCP_TIMEOUT", "30")
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise StartupError(f"GH_MCP_TIMEOUT must be a number, got {raw_timeout!r}") from None

    return Settings(
        token=token,
        api_url=(environ.get("GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/"),
        timeout=timeout,
        log_file=environ.get("GH_MCP_LOG_FILE") or DEFAULT_LOG_FILE,
        log_level=(environ.get("GH_MCP_LOG_LEVEL") or "INFO").upper(),
    )


def configure_logging(settings: Settings) -> None:
    """Send logs to a file; stdout belongs to the stdio transport."""
    logging.basicConfig(
        filename=settings.log_file,
        level=getattr(logging, settings.log_level, logging.INFO),
        format=LOG_FORMAT,
        force=True,
    )
