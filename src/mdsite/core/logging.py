import logging
import sys
from pathlib import Path


def setup_logging(log_level: str = "WARNING", log_file: Path | None = None) -> None:
    """
    Configures logging for the application.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )

    # Quieten down noisy libraries
    logging.getLogger("markdown_it").setLevel(logging.WARNING)
