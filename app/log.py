import logging

from rich.logging import RichHandler


def setup_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level.upper())
    root.addHandler(
        RichHandler(
            rich_tracebacks=True,
            show_path=False,
            show_time=True,
            show_level=True,
        )
    )
    # One line per gateway request is plenty.
    logging.getLogger("httpx").setLevel(logging.WARNING)
