import logging
import re

# absolute paths only: "/" must open a token or follow a quote, paren or "="
_PATH_RE = re.compile(r"""(?:(?<![^\s'"(=])/|\b[A-Z]:\\)[^\s'"]+""", re.IGNORECASE)
_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def sanitize(message: str) -> str:
    """Mask file paths and email addresses before a message is logged."""
    message = _PATH_RE.sub("[path]", message)
    return _EMAIL_RE.sub("[email]", message)
