"""Explicit database handle shared by the stores.

One Database is built when the app registry is ready and passed into every
store. Django opens the underlying connection lazily on first use and keeps
it for CONN_MAX_AGE seconds, so later requests on the same worker reuse it.
"""

import functools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import ParamSpec, TypeVar

from django.db import DEFAULT_DB_ALIAS, InterfaceError, OperationalError, transaction
from django.db.transaction import Atomic

from events.domain.errors import DatabaseUnavailableError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


@dataclass(frozen=True)
class Database:
    """Names the Django connection the stores read from and write to."""

    alias: str = DEFAULT_DB_ALIAS

    def atomic(self) -> Atomic:
        return transaction.atomic(using=self.alias)


def translate_database_errors(func: Callable[P, R]) -> Callable[P, R]:
    """Re-raise driver connectivity errors as DatabaseUnavailableError."""

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except (OperationalError, InterfaceError) as exc:
            logger.error("Database error in %s: %s", func.__qualname__, exc)
            raise DatabaseUnavailableError() from exc

    return wrapper
