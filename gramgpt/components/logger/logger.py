import logging
import sys


class Logger:
    """Configures the process root logger once and hands out named loggers."""

    def __init__(self, log_format: str, log_level: str) -> None:
        self.log_format = log_format
        self.log_level = log_level.upper()

        root = logging.getLogger()
        if not any(getattr(h, "_gramgpt", False) for h in root.handlers):
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter(self.log_format))
            handler._gramgpt = True  # type: ignore[attr-defined]
            root.addHandler(handler)
        root.setLevel(self.log_level)

        # telethon is chatty at INFO
        logging.getLogger("telethon").setLevel(logging.WARNING)

    def get_logger(self, name: str) -> logging.Logger:
        return logging.getLogger(name)
