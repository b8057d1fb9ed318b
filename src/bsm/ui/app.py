from __future__ import annotations

import tkinter as tk
from tkinter import ttk, messagebox
import logging
from pathlib import Path

from bsm.domain.errors import AppError
from bsm.services.reporting_service import format_number
from bsm.ui.views.inventory_view import InventoryView
from bsm.ui.views.sales_view import SalesView
from bsm.ui.views.reports_view import ReportsView

log = logging.getLogger(__name__)


class App(tk.Tk):
    def __init__(
        self,
        store,
        inventory_service,
        sales_service,
        reporting_service,
        excel_service,
        db_path: str,
        logs_dir: str,
    ):
        super().__init__()
        self.title("Book Sales Manager")
        self.geometry("1280x720")
        self.minsize(1120, 640)

        self.store = store
        self.inventory = inventory_service
        self.sales = sales_service
        self.reporting = reporting_service
        self.excel = excel_service

        self.db_path = db_path
        self.logs_dir = logs_dir

        self.status_var = tk.StringVar(value="")
        self._toast_after_id = None

        self._build_styles()
        self._build_topbar()

        main = ttk.Frame(self)
        main.pack(fill="both", expand=True, padx=12, pady=(0, 8))

        self.sidebar = ttk.Frame(main)
        self.sidebar.pack(side="left", fill="y", padx=(0, 10))

        self.content = ttk.Frame(main)
        self.content.pack(side="right", fill="both", expand=True)

        self.nb = ttk.Notebook(self.content, style="Side.TNotebook")
        self.nb.pack(fill="both", expand=True)

        # Views (tabs hidden)
        self.inventory_view = InventoryView(self.nb, self)
        self.sales_view = SalesView(self.nb, self)
        self.reports_view = ReportsView(self.nb, self)

        self._build_sidebar()
        self._build_status_bar()

        self._unsubscribe = self.store.subscribe(self.refresh_all)
        self.protocol("WM_DELETE_WINDOW", self.on_close)

        self.refresh_all()
        self.toast("Ready.", kind="info", ms=1200)

    def _build_styles(self):
        style = ttk.Style(self)
        style.layout("Side.TNotebook.Tab", [])
        style.configure("Side.TNotebook", tabmargins=0)

        try:
            style.configure("Big.TButton", padding=(14, 10))
            style.configure("Title.TLabel", font=("Segoe UI", 12, "bold"))
            style.configure("KPI.TLabel", font=("Segoe UI", 10))
            style.configure("KPIValue.TLabel", font=("Segoe UI", 11, "bold"))
        except tk.TclError as e:
            log.exception("UI style setup failed: %s", e)

    def _build_topbar(self):
        top = ttk.Frame(self)
        top.pack(fill="x", padx=12, pady=10)
        ttk.Label(top, text="Book Sales Manager", style="Title.TLabel").pack(side="left")
        ttk.Label(top, text=f"DB: {Path(self.db_path).name}").pack(side="right")

    def _build_sidebar(self):
        box = ttk.LabelFrame(self.sidebar, text="Quick Actions")
        box.pack(fill="x", pady=(0, 10))

        ttk.Button(
            box, text="📚 Inventory", style="Big.TButton",
            command=lambda: self.nb.select(self.inventory_view.frame)
        ).pack(fill="x", padx=10, pady=(10, 6))

        ttk.Button(
            box, text="🧾 Sales", style="Big.TButton",
            command=lambda: self.nb.select(self.sales_view.frame)
        ).pack(fill="x", padx=10, pady=6)

        ttk.Button(
            box, text="📊 Excel + Reports", style="Big.TButton",
            command=lambda: self.nb.select(self.reports_view.frame)
        ).pack(fill="x", padx=10, pady=(6, 10))

        kpi = ttk.LabelFrame(self.sidebar, text="Report")
        kpi.pack(fill="x")

        self.kpi_labels: dict[str, ttk.Label] = {}
        rows = [
            ("total_profit", "Profit"),
            ("total_revenue", "Revenue"),
            ("total_cost", "Cost"),
            ("total_books_sold", "Books sold"),
            ("total_books_remaining", "Books remaining"),
        ]
        for i, (key, lab) in enumerate(rows):
            ttk.Label(kpi, text=lab, style="KPI.TLabel").grid(
                row=i, column=0, sticky="w", padx=10, pady=(8 if i == 0 else 2, 2)
            )
            w = ttk.Label(kpi, text="-", style="KPIValue.TLabel")
            w.grid(row=i, column=1, sticky="e", padx=10, pady=(8 if i == 0 else 2, 2))
            self.kpi_labels[key] = w

        kpi.columnconfigure(0, weight=1)
        kpi.columnconfigure(1, weight=1)

    def _build_status_bar(self):
        bar = ttk.Frame(self)
        bar.pack(fill="x", padx=12, pady=(0, 10))
        ttk.Label(bar, textvariable=self.status_var).pack(side="left")
        ttk.Label(bar, text=f"Logs: {self.logs_dir}").pack(side="right")

    def toast(self, msg: str, kind: str = "info", ms: int = 2500):
        prefix = {"info": "ℹ ", "success": "✅ ", "warn": "⚠ ", "error": "❌ "}.get(kind, "")
        self.status_var.set(prefix + msg)
        if self._toast_after_id is not None:
            self.after_cancel(self._toast_after_id)
        self._toast_after_id = self.after(ms, lambda: self.status_var.set(""))

    def handle_error(self, title: str, err: Exception, fallback: str):
        if isinstance(err, AppError):
            messagebox.showwarning(title, str(err), parent=self)
            self.toast(str(err), kind="warn")
            return
        log.exception("%s: %s", fallback, err)
        messagebox.showerror(title, fallback, parent=self)
        self.toast(fallback, kind="error")

    # ---------- Refresh ----------
    def refresh_all(self):
        self.inventory_view.refresh()
        self.sales_view.refresh()
        self.reports_view.refresh()
        self.refresh_kpis()

    def refresh_kpis(self):
        report = self.reporting.generate_report()
        for key, w in self.kpi_labels.items():
            value = getattr(report, key)
            w.config(text=str(value) if key.startswith("total_books") else format_number(value))

    def on_close(self):
        self._unsubscribe()
        self.destroy()
