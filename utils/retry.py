"""Retry decorator for handling transient API errors."""

import time
import random
from functools import wraps
from typing import Any, Callable, Optional, Tuple, Type, TypeVar

import config
from .logger import get_logger

logger = get_logger()

F = TypeVar('F', bound=Callable[..., Any])

def retry_on_exception(
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
    max_attempts: int = 3,
    initial_delay: float = 1.0,
    backoff_factor: float = 2.0,
    jitter: float = 0.1,
    retry_if: Optional[Callable[[Exception], bool]] = None,
) -> Callable[[F], F]:
    """Decorator to retry a function call upon specific exceptions with exponential backoff.

    Args:
        exceptions: Exception types that may be retried.
        max_attempts: Maximum number of attempts (including the initial one).
            A value of 1 calls the function once and never sleeps.
        initial_delay: Delay before the first retry in seconds.
        backoff_factor: Multiplier for the delay in subsequent retries.
        jitter: Factor for random jitter (delay * jitter * random.uniform(-1, 1)).
        retry_if: Optional predicate; a caught exception for which it returns
            False is re-raised immediately.

    Returns:
        A decorator function.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            attempts = 0
            delay = initial_delay
            while True:
                attempts += 1
                try:
                    if attempts > 1:
                        logger.debug(f"Retrying {func.__name__} (Attempt {attempts}/{max_attempts})...")
                    return func(*args, **kwargs)
                except exceptions as e:
                    if retry_if is not None and not retry_if(e):
                        raise
                    if attempts >= max_attempts:
                        if max_attempts > 1:
                            logger.error(
                                f"Function {func.__name__} failed after {max_attempts} attempts due to {type(e).__name__}.",
                                exc_info=config.DEBUG
                            )
                        raise

                    wait_time = max(0, delay + delay * jitter * random.uniform(-1, 1))
                    logger.warning(
                        f"Function {func.__name__} failed with {type(e).__name__} (Attempt {attempts}/{max_attempts}). "
                        f"Retrying in {wait_time:.2f} seconds...",
                        exc_info=config.DEBUG
                    )
                    time.sleep(wait_time)
                    delay *= backoff_factor

        return wrapper # type: ignore
    return decorator
