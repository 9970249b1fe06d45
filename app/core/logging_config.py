"""Root logger setup shared by the API and the CLI scripts."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

# Attributes every LogRecord has; anything else arrived through extra=.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


class ExtraFieldsFormatter(logging.Formatter):
    """Formatter that appends extra= fields as sorted key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = {
            key: value
            for key, value in vars(record).items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        }
        if not extras:
            return line
        fields = " ".join(f"{key}={value}" for key, value in sorted(extras.items()))
        head, sep, tail = line.partition("\n")
        return f"{head} {fields}{sep}{tail}"


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once; later calls only adjust the level."""
    root = logging.getLogger()
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric_level)
    if root.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(ExtraFieldsFormatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
    root.addHandler(handler)
