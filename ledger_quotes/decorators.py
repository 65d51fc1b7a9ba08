from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Any, Callable

from .core.models import QuoteLine, ScrapeTarget

_logger = logging.getLogger("ledger_quotes")


def _find_target(args: tuple[Any, ...], kwargs: dict[str, Any]) -> ScrapeTarget | None:
    target = kwargs.get("target")
    if isinstance(target, ScrapeTarget):
        return target
    # Works for plain functions and bound methods alike
    for arg in args:
        if isinstance(arg, ScrapeTarget):
            return arg
    return None


def log_action(action: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator to log quote actions.

    Logs action, url, from/to codes, elapsed time and result (OK/ERROR) at
    INFO level. Does not swallow exceptions.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            target = _find_target(args, kwargs)
            url = target.url if target else None
            frm = target.from_ if target else None
            to = target.to if target else None
            t0 = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:  # noqa: BLE001
                elapsed_ms = int((time.perf_counter() - t0) * 1000)
                _logger.info(
                    "%s url='%s' from='%s' to='%s' request_ms=%d result=ERROR "
                    "error_type=%s error_message='%s'",
                    action,
                    url,
                    frm,
                    to,
                    elapsed_ms,
                    type(exc).__name__,
                    str(exc).replace("'", "\\'"),
                )
                raise
            elapsed_ms = int((time.perf_counter() - t0) * 1000)
            value = result.value if isinstance(result, QuoteLine) else None
            _logger.info(
                "%s url='%s' from='%s' to='%s' request_ms=%d value='%s' result=OK",
                action,
                url,
                frm,
                to,
                elapsed_ms,
                value,
            )
            return result

        return wrapper

    return decorator
