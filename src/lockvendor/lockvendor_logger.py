"""
Structured logger used across lockvendor.
"""

import inspect
import logging
from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel, Field


class LogLine(BaseModel):
    """
    Represents a line in the lockvendor log
    """

    time: str
    level: str
    caller_file: str
    caller_name: str
    caller_line: int
    message: str
    tags: Dict[str, Any] = Field(default_factory=dict)


class LockvendorLogger:
    """
    Logger class that emits one JSON line per event, tagged with arbitrary fields.
    """

    def __init__(self, name: str = "lockvendor", level: int = logging.INFO) -> None:
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)

    def log(self, message: str, level: int, **fields: Any) -> None:
        """
        Log the message at the given level, attaching ``fields`` as structured data.

        Field names may contain dots, pass them with ``**{"dist.url": url}``.
        """
        if not self.logger.isEnabledFor(level):
            return

        message = message.replace("\n", " ")

        caller_frame = inspect.currentframe().f_back
        caller_file = caller_frame.f_code.co_filename.split("/")[-1]
        caller_line = caller_frame.f_lineno
        caller_name = caller_frame.f_code.co_name

        line = LogLine(
            time=str(datetime.now()),
            level=logging.getLevelName(level),
            caller_file=caller_file,
            caller_name=caller_name,
            caller_line=caller_line,
            message=message,
            tags={key: _plain(value) for key, value in fields.items()},
        )
        self.logger.log(level=level, msg=line.model_dump_json())


def _plain(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)
