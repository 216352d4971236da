"""
UI slot hata korumasının testleri (Qt gerektirmez).
"""

import logging
from unittest.mock import MagicMock

from wealthsim.ui.error_guard import report_errors


def test_error_is_logged_and_reported():
    notify = MagicMock()

    with report_errors("Varlık silme", notify):
        raise OSError("disk dolu")

    notify.assert_called_once()
    message = notify.call_args[0][0]
    assert "Varlık silme" in message
    assert "disk dolu" in message


def test_error_is_logged_with_traceback(caplog):
    with caplog.at_level(logging.ERROR, logger="wealthsim.ui.error_guard"):
        with report_errors("Sıfırlama", MagicMock()):
            raise RuntimeError("bağlantı koptu")

    assert "Sıfırlama başarısız" in caplog.text
    assert caplog.records[0].exc_info is not None


def test_clean_block_does_not_notify():
    notify = MagicMock()
    done = []

    with report_errors("İşlem", notify):
        done.append(True)

    assert done == [True]
    notify.assert_not_called()

