# wealthsim/ui/main_window.py

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import (
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QGridLayout,
    QGroupBox,
    QPushButton,
    QLabel,
    QLineEdit,
    QComboBox,
    QSpinBox,
    QTableView,
    QTableWidget,
    QTableWidgetItem,
    QPlainTextEdit,
    QMessageBox,
    QHeaderView,
    QDialog,
    QInputDialog,
)

from wealthsim.domain.models.asset import StockAsset
from wealthsim.domain.models.market import MarketMode, MarketSnapshot, StockQuote
from wealthsim.domain.models.transaction import TradeSide
from wealthsim.application.services.insight_service import MarketInsightService
from wealthsim.application.services.market_data_gateway import MarketDataGateway
from wealthsim.application.services.market_refresh_service import MarketRefreshService
from wealthsim.application.services.portfolio_service import PortfolioService
from wealthsim.application.services.trade_service import TradeService
from wealthsim.ui.asset_table_model import AssetTableModel, TransactionTableModel
from wealthsim.ui.widgets.add_asset_dialog import AddAssetDialog
from wealthsim.ui.error_guard import report_errors

RECENT_CANDLE_ROWS = 10


class MainWindow(QMainWindow):
    """
    Uygulama kabuğu: servisleri widget'lara bağlar.
    Açılışta ve sembol/mod değişiminde varlıkları ve piyasa verisini yeniler.
    """

    def __init__(
        self,
        portfolio_service: PortfolioService,
        trade_service: TradeService,
        gateway: MarketDataGateway,
        refresh_service: MarketRefreshService,
        insight_service: MarketInsightService,
        default_symbol: str = "AAPL",
        parent=None,
    ):
        super().__init__(parent)
        self.portfolio_service = portfolio_service
        self.trade_service = trade_service
        self.gateway = gateway
        self.refresh_service = refresh_service
        self.insight_service = insight_service

        self.symbol = default_symbol
        self.mode = gateway.default_mode()
        self.snapshot: Optional[MarketSnapshot] = None
        self.trade_quote: Optional[StockQuote] = None

        self.setWindowTitle("Varlık Simülasyonu")
        self.resize(1200, 800)

        self._init_ui()
        self._connect_signals()
        self._load_initial_data()

    # --------- UI Kurulumu --------- #

    def _init_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        root = QVBoxLayout(central)

        # --- Üst şerit: sembol arama + mod ---
        top = QHBoxLayout()
        self.line_symbol = QLineEdit(self.symbol)
        self.line_symbol.setPlaceholderText("Sembol (örn: AAPL)")
        self.btn_search = QPushButton("Ara")
        self.combo_mode = QComboBox()
        self.combo_mode.addItem("Simülasyon", MarketMode.SIMULATED)
        self.combo_mode.addItem("Canlı", MarketMode.REAL)
        if not self.gateway.has_live_source:
            # Anahtar yoksa canlı mod seçilemez
            self.combo_mode.model().item(1).setEnabled(False)
        self.combo_mode.setCurrentIndex(0 if self.mode == MarketMode.SIMULATED else 1)
        self.lbl_status = QLabel("")

        top.addWidget(QLabel("Sembol:"))
        top.addWidget(self.line_symbol)
        top.addWidget(self.btn_search)
        top.addSpacing(20)
        top.addWidget(QLabel("Mod:"))
        top.addWidget(self.combo_mode)
        top.addStretch()
        top.addWidget(self.lbl_status)
        root.addLayout(top)

        # --- Orta: piyasa | işlem ---
        middle = QHBoxLayout()
        middle.addWidget(self._build_market_box(), 2)
        middle.addWidget(self._build_trade_box(), 1)
        root.addLayout(middle)

        # --- Alt: varlıklar | işlemler | analiz ---
        bottom = QHBoxLayout()
        bottom.addWidget(self._build_assets_box(), 2)
        bottom.addWidget(self._build_transactions_box(), 2)
        bottom.addWidget(self._build_analysis_box(), 2)
        root.addLayout(bottom)

    def _build_market_box(self) -> QGroupBox:
        box = QGroupBox("Piyasa")
        layout = QVBoxLayout(box)

        grid = QGridLayout()
        self.lbl_price = QLabel("-")
        self.lbl_change = QLabel("-")
        self.lbl_range = QLabel("-")
        self.lbl_open = QLabel("-")
        grid.addWidget(QLabel("Fiyat:"), 0, 0)
        grid.addWidget(self.lbl_price, 0, 1)
        grid.addWidget(QLabel("Değişim:"), 0, 2)
        grid.addWidget(self.lbl_change, 0, 3)
        grid.addWidget(QLabel("Gün Aralığı:"), 1, 0)
        grid.addWidget(self.lbl_range, 1, 1)
        grid.addWidget(QLabel("Açılış / Önceki:"), 1, 2)
        grid.addWidget(self.lbl_open, 1, 3)
        layout.addLayout(grid)

        self.table_candles = QTableWidget(0, 6)
        self.table_candles.setHorizontalHeaderLabels(["Tarih", "Açılış", "Yüksek", "Düşük", "Kapanış", "Hacim"])
        self.table_candles.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table_candles.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        layout.addWidget(self.table_candles)
        return box

    def _build_trade_box(self) -> QGroupBox:
        box = QGroupBox("İşlem")
        layout = QVBoxLayout(box)

        self.btn_quote = QPushButton("Fiyat Al")
        self.lbl_trade_quote = QLabel("Fiyat alınmadı")

        qty_row = QHBoxLayout()
        self.spin_quantity = QSpinBox()
        self.spin_quantity.setRange(1, 1_000_000)
        self.spin_quantity.setValue(10)
        qty_row.addWidget(QLabel("Adet:"))
        qty_row.addWidget(self.spin_quantity)

        btn_row = QHBoxLayout()
        self.btn_buy = QPushButton("AL")
        self.btn_sell = QPushButton("SAT")
        self.btn_buy.setEnabled(False)
        self.btn_sell.setEnabled(False)
        btn_row.addWidget(self.btn_buy)
        btn_row.addWidget(self.btn_sell)

        self.lbl_trade_msg = QLabel("")
        self.lbl_trade_msg.setWordWrap(True)

        layout.addWidget(self.btn_quote)
        layout.addWidget(self.lbl_trade_quote)
        layout.addLayout(qty_row)
        layout.addLayout(btn_row)
        layout.addWidget(self.lbl_trade_msg)
        layout.addStretch()
        return box

    def _build_assets_box(self) -> QGroupBox:
        box = QGroupBox("Varlıklarım")
        layout = QVBoxLayout(box)

        self.lbl_net_worth = QLabel("Toplam: -")
        self.lbl_breakdown = QLabel("Nakit: -  |  Hisse: -")
        layout.addWidget(self.lbl_net_worth)
        layout.addWidget(self.lbl_breakdown)

        self.asset_model = AssetTableModel([])
        self.table_assets = QTableView()
        self.table_assets.setModel(self.asset_model)
        self.table_assets.setSelectionBehavior(QTableView.SelectRows)
        self.table_assets.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        layout.addWidget(self.table_assets)

        btn_row = QHBoxLayout()
        self.btn_add_asset = QPushButton("Varlık Ekle")
        self.btn_edit_asset = QPushButton("Değeri Güncelle")
        self.btn_delete_asset = QPushButton("Seçiliyi Sil")
        self.btn_reset = QPushButton("Sıfırla")
        btn_row.addWidget(self.btn_add_asset)
        btn_row.addWidget(self.btn_edit_asset)
        btn_row.addWidget(self.btn_delete_asset)
        btn_row.addStretch()
        btn_row.addWidget(self.btn_reset)
        layout.addLayout(btn_row)
        return box

    def _build_transactions_box(self) -> QGroupBox:
        box = QGroupBox("İşlem Geçmişi")
        layout = QVBoxLayout(box)
        self.tx_model = TransactionTableModel([])
        self.table_transactions = QTableView()
        self.table_transactions.setModel(self.tx_model)
        self.table_transactions.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        layout.addWidget(self.table_transactions)
        return box

    def _build_analysis_box(self) -> QGroupBox:
        box = QGroupBox("Yapay Zeka Analizi")
        layout = QVBoxLayout(box)
        self.btn_analyze = QPushButton("Analiz Et")
        self.btn_analyze.setEnabled(False)
        self.text_analysis = QPlainTextEdit()
        self.text_analysis.setReadOnly(True)
        self.text_analysis.setPlaceholderText("Seçili sembol için yorum almak üzere butona basın.")
        layout.addWidget(self.btn_analyze)
        layout.addWidget(self.text_analysis)
        return box

    def _connect_signals(self):
        self.btn_search.clicked.connect(self.on_search_clicked)
        self.line_symbol.returnPressed.connect(self.on_search_clicked)
        self.combo_mode.currentIndexChanged.connect(self.on_mode_changed)
        self.btn_quote.clicked.connect(self.on_quote_clicked)
        self.btn_buy.clicked.connect(lambda: self.on_trade_clicked(TradeSide.BUY))
        self.btn_sell.clicked.connect(lambda: self.on_trade_clicked(TradeSide.SELL))
        self.btn_add_asset.clicked.connect(self.on_add_asset_clicked)
        self.btn_edit_asset.clicked.connect(self.on_edit_asset_clicked)
        self.btn_delete_asset.clicked.connect(self.on_delete_asset_clicked)
        self.btn_reset.clicked.connect(self.on_reset_clicked)
        self.btn_analyze.clicked.connect(self.on_analyze_clicked)

    # --------- Veri yükleme --------- #

    def _load_initial_data(self):
        self.refresh_assets()
        self.load_market_data(self.symbol)

    def refresh_assets(self):
        summary = None
        with report_errors("Varlıkları okuma", self._show_error):
            assets = self.portfolio_service.list_assets()
            transactions = self.portfolio_service.list_transactions()
            summary = self.portfolio_service.summary()
        if summary is None:
            return

        self.asset_model.update_data(assets)
        self.tx_model.update_data(transactions)
        self.lbl_net_worth.setText(f"Toplam: {summary.net_worth:,.2f}")
        self.lbl_breakdown.setText(
            f"Nakit: {summary.cash_total:,.2f}  |  Hisse: {summary.stock_total:,.2f}"
        )

    def load_market_data(self, symbol: str):
        self.lbl_status.setText("Yükleniyor...")
        self.repaint()

        snapshot = self.refresh_service.refresh(symbol, self.mode)
        if snapshot is None:
            # Eski veriler ekranda kalır
            self.lbl_status.setText("Veri yenilenemedi")
            return

        self.snapshot = snapshot
        self.symbol = snapshot.symbol
        self.line_symbol.setText(snapshot.symbol)
        self.trade_quote = None
        self._update_trade_quote_view()
        self._update_market_view()
        self.btn_analyze.setEnabled(True)
        self.text_analysis.clear()
        mode_label = "Simülasyon" if self.mode == MarketMode.SIMULATED else "Canlı"
        self.lbl_status.setText(f"{snapshot.symbol} · {mode_label}")

    def _update_market_view(self):
        quote = self.snapshot.quote
        self.lbl_price.setText(f"{quote.price:.2f}")
        self.lbl_change.setText(f"{quote.change:+.2f} ({quote.percent_change:+.2f}%)")
        self.lbl_range.setText(f"{quote.low:.2f} - {quote.high:.2f}")
        self.lbl_open.setText(f"{quote.open:.2f} / {quote.prev_close:.2f}")

        recent = list(reversed(self.snapshot.candles[-RECENT_CANDLE_ROWS:]))
        self.table_candles.setRowCount(len(recent))
        for row, candle in enumerate(recent):
            values = [
                candle.bar_date.isoformat(),
                f"{candle.open:.2f}",
                f"{candle.high:.2f}",
                f"{candle.low:.2f}",
                f"{candle.close:.2f}",
                f"{candle.volume:,}",
            ]
            for col, value in enumerate(values):
                item = QTableWidgetItem(value)
                item.setTextAlignment(Qt.AlignCenter)
                self.table_candles.setItem(row, col, item)

    def _update_trade_quote_view(self):
        has_quote = self.trade_quote is not None
        self.btn_buy.setEnabled(has_quote)
        self.btn_sell.setEnabled(has_quote)
        if has_quote:
            q = self.trade_quote
            self.lbl_trade_quote.setText(
                f"{q.symbol}: {q.price:.2f} ({q.percent_change:+.2f}%)"
            )
        else:
            self.lbl_trade_quote.setText("Fiyat alınmadı")

    def _show_error(self, message: str):
        QMessageBox.critical(self, "Hata", message)

    def _selected_asset(self, hint: str):
        selection = self.table_assets.selectionModel().selectedRows()
        if not selection:
            QMessageBox.information(self, "Bilgi", hint)
            return None
        return self.asset_model.get_asset(selection[0].row())

    # --------- Slotlar --------- #

    def on_search_clicked(self):
        symbol = self.line_symbol.text().strip().upper()
        if symbol:
            self.load_market_data(symbol)

    def on_mode_changed(self, index: int):
        self.mode = self.combo_mode.itemData(index)
        self.refresh_assets()
        self.load_market_data(self.symbol)

    def on_quote_clicked(self):
        with report_errors("Fiyat alma", self._show_error):
            self.trade_quote = self.gateway.get_quote(self.symbol, self.mode)
            self._update_trade_quote_view()

    def on_trade_clicked(self, side: TradeSide):
        if self.trade_quote is None:
            return

        quantity = self.spin_quantity.value()
        with report_errors("İşlem", self._show_error):
            try:
                result = self.trade_service.execute(side, quantity, self.trade_quote)
            except ValueError as e:
                # InsufficientFundsError dahil; durum değişmez
                self.lbl_trade_msg.setText(str(e))
                return

            verb = "alındı" if side == TradeSide.BUY else "satıldı"
            self.lbl_trade_msg.setText(
                f"{result.transaction.quantity} adet {result.transaction.symbol} {verb}."
            )
        self.refresh_assets()

    def on_add_asset_clicked(self):
        dialog = AddAssetDialog(self)
        if dialog.exec_() != QDialog.Accepted:
            return
        values = dialog.get_values()
        with report_errors("Varlık ekleme", self._show_error):
            try:
                self.portfolio_service.add_manual_asset(**values)
            except ValueError as e:
                QMessageBox.warning(self, "Uyarı", str(e))
                return
        self.refresh_assets()

    def on_edit_asset_clicked(self):
        asset = self._selected_asset("Değerini güncellemek için bir varlık seçin.")
        if asset is None:
            return
        if isinstance(asset, StockAsset):
            QMessageBox.information(self, "Bilgi", "Hisse değeri alım/satım işlemleriyle güncellenir.")
            return

        value, ok = QInputDialog.getDouble(
            self,
            "Değeri Güncelle",
            f"'{asset.name}' için yeni değer:",
            float(asset.value),
            0,
            1_000_000_000,
            2,
        )
        if not ok:
            return
        with report_errors("Değer güncelleme", self._show_error):
            try:
                self.portfolio_service.update_asset_value(
                    asset.id, Decimal(str(value)).quantize(Decimal("0.01"))
                )
            except ValueError as e:
                QMessageBox.warning(self, "Uyarı", str(e))
                return
        self.refresh_assets()

    def on_delete_asset_clicked(self):
        asset = self._selected_asset("Silmek için bir varlık seçin.")
        if asset is None:
            return
        reply = QMessageBox.question(
            self,
            "Onay",
            f"'{asset.name}' silinsin mi?",
            QMessageBox.Yes | QMessageBox.No,
        )
        if reply != QMessageBox.Yes:
            return
        with report_errors("Varlık silme", self._show_error):
            self.portfolio_service.delete_asset(asset.id)
        self.refresh_assets()

    def on_reset_clicked(self):
        reply = QMessageBox.question(
            self,
            "Sistemi Sıfırla",
            "Tüm varlıklar ve işlemler başlangıç verisine dönecek. Emin misiniz?",
            QMessageBox.Yes | QMessageBox.No,
        )
        if reply != QMessageBox.Yes:
            return
        with report_errors("Sıfırlama", self._show_error):
            self.portfolio_service.reset()
        self.refresh_assets()

    def on_analyze_clicked(self):
        if self.snapshot is None or not self.snapshot.candles:
            return
        self.text_analysis.setPlainText("Analiz hazırlanıyor...")
        self.repaint()
        with report_errors("Analiz", self._show_error):
            text = self.insight_service.explain(
                self.snapshot.symbol, self.snapshot.quote, self.snapshot.candles
            )
            self.text_analysis.setPlainText(text)
