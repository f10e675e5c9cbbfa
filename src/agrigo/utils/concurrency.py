"""Write serialization for the in-memory store.

A memory-provider unit of work runs against a private copy of the whole
store and swaps that copy in on commit, so two handlers committing from
different threads overwrite each other. While the default provider is the
memory store, write handlers therefore run one at a time per process.
SQL providers rely on their own conditional writes instead.
"""

import functools
import threading

from protean.utils.globals import current_domain

_write_lock = threading.RLock()


def _store_is_in_memory() -> bool:
    provider = current_domain.providers["default"]
    return getattr(provider, "__database__", None) == "memory"


def serialized_writes(handler):
    """Run a ``@handle`` method, unit of work included, under the write lock.

    Apply it above ``@handle`` so the lock is held until the commit is done.
    """

    @functools.wraps(handler)
    def wrapper(instance, command):
        if not _store_is_in_memory():
            return handler(instance, command)
        with _write_lock:
            return handler(instance, command)

    return wrapper
