"""Access decorators for session-bound and key-gated functions.
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

from humint.common.exceptions import AccessDenied, AuthenticationFailed, SessionError

logger = logging.getLogger(__name__)


def _resolve_session(
    session: Any | Callable[..., Any] | str, func: Callable, args: tuple
) -> Any:
    # Attribute name on self, factory callable, or the session itself
    if isinstance(session, str):
        if not args:
            msg = f"Cannot get session attribute '{session}' without self"
            raise ValueError(msg)
        return getattr(args[0], session)
    if callable(session) and not hasattr(session, "is_logged_in"):
        if args and hasattr(args[0], func.__name__):
            try:
                return session(args[0])
            except TypeError:
                return session()
        return session()
    return session


def requires_identity(
    session: Any | Callable[..., Any] | str,
    error_message: str = "No identity loaded",
    *,
    raise_exception: bool = True,
) -> Callable:
    """Decorator that runs the function only while the session is logged in.

    Args:
        session: CryptoSession instance, callable returning one, or the name
            of the attribute holding one on ``self``
        error_message: Message used when no identity is loaded
        raise_exception: Whether to raise SessionError or return None

    Returns:
        Decorated function that only executes with a loaded identity
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            current = _resolve_session(session, func, args)
            if not current.is_logged_in():
                if raise_exception:
                    raise SessionError(error_message)
                logger.warning("Identity check failed: %s", error_message)
                return None
            return func(*args, **kwargs)

        return wrapper

    return decorator


def access_gated(
    error_message: str = "Access denied",
    *,
    raise_exception: bool = True,
) -> Callable:
    """Decorator that turns key-derivation failures into an access decision.

    A caller who cannot derive the right key gets AuthenticationFailed from
    the cipher layer; product code wants that as "access denied".

    Args:
        error_message: Message for the AccessDenied exception
        raise_exception: Whether to raise AccessDenied or return None

    Returns:
        Decorated function
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except AuthenticationFailed as err:
                if raise_exception:
                    raise AccessDenied(error_message) from err
                logger.warning("Access check failed: %s", error_message)
                return None

        return wrapper

    return decorator
