"""AI gateway package: provider port, prompts and typed results.

The gateway itself lives in ``studiq.modules.ai.gateway``; it is not
re-exported here because the record models it returns import this package.
"""

from .results import ErrorKind, GatewayResult, ResultStatus

__all__ = [
    "ErrorKind",
    "GatewayResult",
    "ResultStatus",
]
