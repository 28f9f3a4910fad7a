import logging
import os

from modelgate import config

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Environment variables whose values must never reach a log line
SECRET_ENV_VARS = ("LLM_API_KEY", "SAP_AI_CORE_CLIENT_SECRET")

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s.%(funcName)s] %(message)s"

# Workflow commands turn warnings/errors into annotations on the run summary
_ACTIONS_COMMANDS = {
    logging.DEBUG: "::debug::",
    logging.WARNING: "::warning::",
    logging.ERROR: "::error::",
    logging.CRITICAL: "::error::",
}


class SecretMaskFilter(logging.Filter):
    """Replaces known credential values in log messages with ``***``."""

    def __init__(self, secrets=None):
        super().__init__()
        self.secrets = [s for s in (secrets or []) if s]

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.secrets:
            return True
        message = record.getMessage()
        masked = message
        for secret in self.secrets:
            masked = masked.replace(secret, "***")
        if masked != message:
            record.msg = masked
            record.args = None
        return True


class ActionsFormatter(logging.Formatter):
    """Prefix records with the GitHub Actions workflow command for their level."""

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        prefix = _ACTIONS_COMMANDS.get(record.levelno, "")
        # workflow commands are single-line
        return prefix + text.replace("\n", "%0A") if prefix else text


def _running_in_actions() -> bool:
    return os.getenv("GITHUB_ACTIONS", "").lower() == "true"


def _build_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    if _running_in_actions():
        handler.setFormatter(ActionsFormatter("%(message)s"))
    else:
        handler.setFormatter(
            logging.Formatter(PLAIN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        )
    handler.addFilter(SecretMaskFilter([os.getenv(name) for name in SECRET_ENV_VARS]))
    return handler


default_level = config.LOGGING_LEVEL

logger = logging.getLogger("modelgate")
if not logger.handlers:
    logger.addHandler(_build_handler())
logger.setLevel(default_level if default_level in VALID_LEVELS else logging.INFO)

# Shortcut aliases
debug = logger.debug
info = logger.info
warning = logger.warning
error = logger.error
exception = logger.exception


def get_logger():
    return logger


def set_logging_level(level: str):
    normalized_level = level.upper()
    if normalized_level not in VALID_LEVELS:
        logger.warning(f"Invalid logging level: {level}. Level not changed.")
        return
    logger.setLevel(getattr(logging, normalized_level))
    logger.debug(f"Logging level changed to: {normalized_level}")
