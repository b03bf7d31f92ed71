"""View decorators for the bearer token gate."""

from collections.abc import Callable
from functools import wraps
from typing import Any


def bearer_exempt(view_func: Callable[..., Any]) -> Callable[..., Any]:
    """Mark a view as reachable without a bearer token.

    Works like Django's ``csrf_exempt``: the middleware looks for the
    ``bearer_exempt`` attribute on the resolved view.
    """

    @wraps(view_func)
    def wrapped_view(*args: Any, **kwargs: Any) -> Any:
        return view_func(*args, **kwargs)

    wrapped_view.bearer_exempt = True  # type: ignore[attr-defined]
    return wrapped_view
