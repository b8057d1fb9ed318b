from __future__ import annotations

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.table import Table, TableStyleInfo

from bsm.domain.models import Report


def format_number(value: float) -> str:
    return f"{float(value):,.2f}"


class ReportingService:
    def __init__(self, store):
        self.store = store

    def generate_report(self) -> Report:
        return self.store.generate_report()

    def export_report_excel(self, path: str) -> None:
        wb = Workbook()

        def money(cell):
            cell.number_format = "#,##0.00"

        def bold_row(ws, r):
            for c in ws[r]:
                c.font = Font(bold=True)

        def set_widths(ws, widths: dict[str, int]):
            for col, w in widths.items():
                ws.column_dimensions[col].width = w

        def add_table(ws, name: str, end_row: int, end_col: int):
            ref = f"A1:{get_column_letter(end_col)}{end_row}"
            tab = Table(displayName=name, ref=ref)
            tab.tableStyleInfo = TableStyleInfo(
                name="TableStyleMedium9",
                showRowStripes=True,
                showColumnStripes=False,
            )
            ws.add_table(tab)

        report = self.generate_report()
        sales = self.store.get_sales()
        books = self.store.get_books()

        # -------- 1) Summary --------
        ws = wb.active
        ws.title = "Summary"
        ws["A1"] = "Summary"
        ws["A1"].font = Font(bold=True, size=14)

        rows = [
            ("Total profit", float(report.total_profit), "money"),
            ("Books sold (all sales)", int(report.total_books_sold), "int"),
            ("Books remaining", int(report.total_books_remaining), "int"),
            ("Revenue", float(report.total_revenue), "money"),
            ("Cost", float(report.total_cost), "money"),
            ("Pending sales", sum(1 for s in sales if not s.completed), "int"),
            ("Completed sales", sum(1 for s in sales if s.completed), "int"),
        ]
        for i, (label, val, kind) in enumerate(rows):
            r = 3 + i
            ws[f"A{r}"] = label
            ws[f"B{r}"] = val
            if kind == "money":
                money(ws[f"B{r}"])
        set_widths(ws, {"A": 28, "B": 18})

        # -------- 2) Sales --------
        ws2 = wb.create_sheet("Sales")
        ws2.append([
            "Sale ID", "Date", "Customer", "Book",
            "Qty", "Wholesale", "Selling", "Total Cost", "Profit", "Status",
        ])
        bold_row(ws2, 1)
        for out_row, s in enumerate(sales, start=2):
            ws2.append([
                s.id, s.date, s.customer_name, s.book_name,
                int(s.quantity), float(s.wholesale_price), float(s.selling_price),
                float(s.total_cost), float(s.profit), "completed" if s.completed else "pending",
            ])
            for col in ("F", "G", "H", "I"):
                money(ws2[f"{col}{out_row}"])
        ws2.freeze_panes = "A2"
        set_widths(ws2, {
            "A": 34, "B": 26, "C": 24, "D": 34, "E": 6,
            "F": 12, "G": 12, "H": 14, "I": 12, "J": 12,
        })
        if ws2.max_row >= 2:
            add_table(ws2, "SalesDetail", ws2.max_row, 10)

        # -------- 3) Inventory --------
        ws3 = wb.create_sheet("Inventory")
        ws3.append(["Book ID", "Name", "Price per unit", "Quantity", "Total Cost"])
        bold_row(ws3, 1)
        for out_row, b in enumerate(books, start=2):
            ws3.append([b.id, b.name, float(b.price_per_unit), int(b.quantity), float(b.total_cost)])
            money(ws3[f"C{out_row}"])
            money(ws3[f"E{out_row}"])
        ws3.freeze_panes = "A2"
        set_widths(ws3, {"A": 34, "B": 34, "C": 14, "D": 10, "E": 14})
        if ws3.max_row >= 2:
            add_table(ws3, "InventoryDetail", ws3.max_row, 5)

        wb.save(path)
