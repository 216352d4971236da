# wealthsim/ui/error_guard.py

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Generator

logger = logging.getLogger(__name__)


@contextmanager
def report_errors(action: str, notify: Callable[[str], None]) -> Generator[None, None, None]:
    """
    Qt slot'ları için: bloktaki beklenmeyen hata loglanır ve notify ile
    kullanıcıya gösterilir, slot'tan dışarı çıkmaz.

    Kullanıcı hataları (ValueError) slot içinde ayrıca ele alınır.

        with report_errors("Varlık silme", self._show_error):
            ...
    """
    try:
        yield
    except Exception as exc:
        logger.exception("%s başarısız", action)
        notify(f"{action} başarısız:\n{exc}")
