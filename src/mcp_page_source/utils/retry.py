"""Retries for browser reads that can race a navigation."""

import time
import random
from typing import Callable, Tuple, Type, TypeVar
from selenium.common.exceptions import (
    JavascriptException,
    NoSuchWindowException,
    StaleElementReferenceException,
    WebDriverException,
)

import logging
logger = logging.getLogger(__name__)

T = TypeVar("T")

# A script error is a bug in the script or the selector, not a transient state.
NON_TRANSIENT: Tuple[Type[Exception], ...] = (JavascriptException,)
TRANSIENT: Tuple[Type[Exception], ...] = (
    NoSuchWindowException,
    StaleElementReferenceException,
    WebDriverException,
)


def retry_op(fn: Callable[[], T], retries: int = 2, base_delay: float = 0.15) -> T:
    """
    Call ``fn``, retrying a read that failed while the document was being swapped.

    The delay grows linearly with the attempt number and carries jitter.
    Script errors are raised at once; the last transient error is raised
    when the retries run out.
    """
    attempt = 0
    while True:
        try:
            return fn()
        except NON_TRANSIENT:
            raise
        except TRANSIENT as e:
            if attempt >= retries:
                raise
            attempt += 1
            delay = base_delay * attempt * (1.0 + random.random())
            logger.debug(f"Browser read failed ({type(e).__name__}); retry {attempt}/{retries} in {delay:.2f}s")
            time.sleep(delay)


__all__ = ["retry_op"]
