# -*- coding: utf-8 -*-
"""Last-resort exception hooks for the command line entry.

Anything that escapes ``main()`` (or a worker thread) ends up in the app log
with its traceback instead of only on the terminal.
"""

from __future__ import annotations

import logging
import sys
import threading
import traceback
from types import TracebackType
from typing import Optional, Type

log = logging.getLogger(__name__)

_reentrant = False


def log_unhandled(exc_type: Type[BaseException], exc: BaseException, tb: Optional[TracebackType]) -> None:
    global _reentrant
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc, tb)
        return
    if _reentrant:
        sys.__stderr__.write("Unhandled exception while reporting another one\n")
        return

    _reentrant = True
    try:
        log.critical("Unhandled exception", exc_info=(exc_type, exc, tb))
    except Exception:
        sys.__stderr__.write("".join(traceback.format_exception(exc_type, exc, tb)))
    finally:
        _reentrant = False


def install_global_exception_handlers() -> None:
    """Route uncaught exceptions of the main and worker threads to the log."""
    sys.excepthook = log_unhandled  # type: ignore[assignment]

    def _thread_hook(args):  # pragma: no cover
        log_unhandled(args.exc_type, args.exc_value, args.exc_traceback)

    threading.excepthook = _thread_hook  # type: ignore[assignment]
