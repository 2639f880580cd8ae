import logging
from typing import Iterable, Union


class ClippingFilter(logging.Filter):
    """Clip overlong log messages so large leaf values do not flood logs."""

    def __init__(self, max_chars: int = 512):
        super().__init__()
        self.max_chars = max_chars

    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage()
        if len(msg) > self.max_chars:
            clipped = len(msg) - self.max_chars
            record.msg = f"{msg[: self.max_chars]}... [{clipped} chars clipped]"
            record.args = None
        return True


def setup_logging(
    level: Union[int, str] = logging.WARNING,
    loggers: Iterable[str] = ("kmerkle", "kmerkle_cli"),
    max_chars: int = 512,
) -> None:
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level)
    # Logger filters do not see records from child loggers; handlers do.
    for h in logging.getLogger().handlers:
        for old in [f for f in h.filters if isinstance(f, ClippingFilter)]:
            h.removeFilter(old)
        h.addFilter(ClippingFilter(max_chars))
    for name in loggers:
        logging.getLogger(name).setLevel(level)
