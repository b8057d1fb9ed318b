from __future__ import annotations

import tkinter as tk
from tkinter import ttk, filedialog
from datetime import date

from bsm.services.reporting_service import format_number


class ReportsView:
    def __init__(self, notebook: ttk.Notebook, app):
        self.app = app
        self.frame = ttk.Frame(notebook)
        notebook.add(self.frame, text="Excel + Reports")
        self._build()

    def _build(self):
        tab = self.frame

        box1 = ttk.LabelFrame(tab, text="Import books from Excel")
        box1.pack(fill="x", padx=10, pady=10)

        ttk.Label(box1, text="Headers: name | price_per_unit | quantity (quantity is added to existing stock)")\
            .pack(anchor="w", padx=10, pady=(8, 4))
        ttk.Button(box1, text="Choose file and import", style="Big.TButton", command=self.import_excel)\
            .pack(anchor="w", padx=10, pady=(0, 10))

        box2 = ttk.LabelFrame(tab, text="Export report to Excel")
        box2.pack(fill="x", padx=10, pady=10)
        ttk.Button(box2, text="Export report", style="Big.TButton", command=self.export_report)\
            .pack(anchor="w", padx=10, pady=10)

        dash = ttk.LabelFrame(tab, text="Dashboard")
        dash.pack(fill="both", expand=True, padx=10, pady=10)

        self.canvas = tk.Canvas(dash, height=240, bg="#f8fafc", highlightthickness=1, highlightbackground="#cbd5e1")
        self.canvas.pack(fill="both", expand=True, padx=6, pady=6)

    def refresh(self):
        report = self.app.reporting.generate_report()
        data = [
            ("Revenue", float(report.total_revenue)),
            ("Cost", float(report.total_cost)),
            ("Profit", float(report.total_profit)),
        ]
        self._draw_bar_chart(self.canvas, "Sales totals", data, color="#2563eb")

    def _draw_bar_chart(self, canvas: tk.Canvas, title: str, data: list[tuple[str, float]], color: str = "#2b78c2"):
        canvas.delete("all")
        w, h = int(canvas.winfo_width() or 560), int(canvas.winfo_height() or 240)
        canvas.create_text(12, 16, text=title, anchor="w", font=("Segoe UI", 10, "bold"), fill="#0f172a")
        if not any(v for _, v in data):
            canvas.create_text(w // 2, h // 2, text="No data", fill="#64748b")
            return
        maxv = max(abs(v) for _, v in data) or 1
        bw = max(24, (w - 40) // len(data))
        for i, (label, val) in enumerate(data):
            x0 = 24 + i * bw
            x1 = x0 + bw - 8
            y1 = h - 30
            y0 = y1 - int((max(val, 0) / maxv) * (h - 70))
            canvas.create_rectangle(x0, y0, x1, y1, fill=color, outline="")
            canvas.create_text((x0 + x1) // 2, y1 + 12, text=label, font=("Segoe UI", 8), fill="#475569")
            canvas.create_text((x0 + x1) // 2, y0 - 8, text=format_number(val), font=("Segoe UI", 8), fill="#0f172a")

    def import_excel(self):
        path = filedialog.askopenfilename(title="Select Excel file", filetypes=[("Excel files", "*.xlsx")])
        if not path:
            return
        try:
            ok, skipped = self.app.excel.import_books_excel(path)
            self.app.toast(f"Excel import: {ok} ok, {skipped} skipped.", kind="success")
        except Exception as e:
            self.app.handle_error("Import error", e, "Excel import failed.")

    def export_report(self):
        path = filedialog.asksaveasfilename(
            title="Save report as",
            defaultextension=".xlsx",
            filetypes=[("Excel files", "*.xlsx")],
            initialfile=f"book_sales_report_{date.today().isoformat()}.xlsx",
        )
        if not path:
            return
        try:
            self.app.reporting.export_report_excel(path)
            self.app.toast("Excel report exported.", kind="success")
        except Exception as e:
            self.app.handle_error("Export error", e, "Excel export failed.")
