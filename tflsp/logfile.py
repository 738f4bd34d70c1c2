"""Loggers writing to streams and to templated log files."""

from __future__ import annotations

import logging
import os
from typing import IO

from .pathtpl import TemplateError, TemplatedPath, new_path

_FORMAT = "%(asctime)s %(filename)s:%(lineno)d: %(message)s"
_DATEFMT = "%Y/%m/%d %H:%M:%S"


def new_logger(stream: IO[str]) -> logging.Logger:
    """Return a logger writing timestamped lines to the stream."""
    logger = logging.Logger(f"tflsp.{id(stream)}")
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(_FORMAT, _DATEFMT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


class FileLogger:
    """A logger that owns the file it writes to."""

    def __init__(self, stream: IO[str]) -> None:
        self._stream = stream
        self.logger = new_logger(stream)

    def close(self) -> None:
        for handler in list(self.logger.handlers):
            handler.flush()
            self.logger.removeHandler(handler)
        self._stream.close()

    def __enter__(self) -> "FileLogger":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def open_file_logger(raw_path: str) -> FileLogger:
    """Open (truncating) the templated absolute log path."""
    try:
        path = new_path("log-file").parse(raw_path).execute(None)
    except TemplateError as exc:
        raise ValueError(f"failed to parse path: {exc}") from exc
    if not os.path.isabs(path):
        raise ValueError(
            f"please provide absolute log path to prevent ambiguity (given: {path!r})"
        )
    fd = os.open(path, os.O_TRUNC | os.O_CREAT | os.O_WRONLY, 0o600)
    return FileLogger(os.fdopen(fd, "w"))


def _exec_log_template(method: str, raw_path: str) -> TemplatedPath:
    def method_func() -> str:
        return method

    # "args" is a deprecated alias of "method"
    return new_path("tf-log-file").funcs({"method": method_func, "args": method_func}).parse(raw_path)


def validate_exec_log_path(raw_path: str) -> None:
    """Raise TemplateError if the exec log path template is invalid."""
    _exec_log_template("", raw_path)


def parse_exec_log_path(method: str, raw_path: str) -> str:
    """Render the exec log path for the given method."""
    return _exec_log_template(method, raw_path).execute(None)