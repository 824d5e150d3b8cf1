"""Typed outcome of a gateway call.

Every gateway operation resolves to a ``GatewayResult`` instead of raising:
callers always get a renderable ``value`` (the documented fallback on
failure) and can still tell "nothing came back" apart from "the call failed".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ResultStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    ERROR = "error"


class ErrorKind(str, Enum):
    # network error, non-success response, provider exception
    TRANSPORT = "transport"
    # response text is not JSON, or JSON not matching the declared schema
    SHAPE = "shape"


@dataclass(frozen=True)
class GatewayResult(Generic[T]):
    status: ResultStatus
    value: T
    error_kind: Optional[ErrorKind] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == ResultStatus.OK

    @property
    def failed(self) -> bool:
        return self.status == ResultStatus.ERROR

    @classmethod
    def success(cls, value: T) -> "GatewayResult[T]":
        return cls(status=ResultStatus.OK, value=value)

    @classmethod
    def empty(cls, value: T, detail: Optional[str] = None) -> "GatewayResult[T]":
        return cls(status=ResultStatus.EMPTY, value=value, detail=detail)

    @classmethod
    def failure(
        cls, value: T, kind: ErrorKind, detail: Optional[str] = None
    ) -> "GatewayResult[T]":
        return cls(status=ResultStatus.ERROR, value=value, error_kind=kind, detail=detail)
