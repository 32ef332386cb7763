"""Pydantic models and typed shapes for gateway payloads and responses."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, TypedDict, Union

from pydantic import BaseModel, ConfigDict, constr


JSONValue = Union[str, int, float, bool, None, Dict[str, Any], List[Any]]

NonEmptyStr = constr(min_length=1)


class Level(str, Enum):
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    DEBUG = "debug"


class LogPayload(BaseModel):
    """A single log record. Unknown keys are kept and sent verbatim."""

    model_config = ConfigDict(extra="allow")

    msg: NonEmptyStr
    service: Optional[str] = None
    timestamp: Optional[str] = None


class BatchLogPayload(LogPayload):
    level: Level


class LogResponse(TypedDict, total=False):
    success: bool
    ingested: int


class HealthResponse(TypedDict, total=False):
    status: str
    timestamp: str


__all__ = [
    "JSONValue",
    "Level",
    "LogPayload",
    "BatchLogPayload",
    "LogResponse",
    "HealthResponse",
]
