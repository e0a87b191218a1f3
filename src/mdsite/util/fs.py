import logging
from pathlib import Path


logger = logging.getLogger(__name__)


def write_file(path: Path, text: str) -> Path:
    """Write text to path, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    logger.debug("Wrote '%s'", path)
    return path
