import logging
import sys
import time

from pythonjsonlogger.json import JsonFormatter

_NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


class UTCJsonFormatter(JsonFormatter):
    converter = time.gmtime


def setup_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level.upper())

    handler = logging.StreamHandler(sys.stdout)
    fmt = "%(asctime)s %(levelname)s %(name)s %(message)s"
    handler.setFormatter(UTCJsonFormatter(fmt))
    root.addHandler(handler)

    # request lines from the HTTP client would log upstream URLs with emails
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel("WARNING")
