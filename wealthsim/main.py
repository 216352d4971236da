# wealthsim/main.py

import logging
import sys

from PyQt5.QtWidgets import QApplication

from wealthsim.config.settings_loader import load_settings
from wealthsim.bootstrap import build_services
from wealthsim.ui.main_window import MainWindow


def main():
    # 1) Ayarlar & logging
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)

    # 2) Store, market data, servisler
    services = build_services(settings)

    # 3) UI
    window = MainWindow(
        portfolio_service=services.portfolio_service,
        trade_service=services.trade_service,
        gateway=services.gateway,
        refresh_service=services.refresh_service,
        insight_service=services.insight_service,
        default_symbol=settings.default_symbol,
    )
    window.show()

    exit_code = app.exec_()
    services.refresh_service.shutdown()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
