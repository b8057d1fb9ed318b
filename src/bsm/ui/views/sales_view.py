from __future__ import annotations

import tkinter as tk
from tkinter import ttk, messagebox
import logging

from bsm.domain.errors import ValidationError
from bsm.services.reporting_service import format_number


log = logging.getLogger(__name__)


class SalesView:
    def __init__(self, notebook: ttk.Notebook, app):
        self.app = app
        self.frame = ttk.Frame(notebook)
        notebook.add(self.frame, text="Sales")

        self.editing_id: str | None = None
        self.book_pick = tk.StringVar()
        self.view_mode = tk.StringVar(value="pending")
        self.totals_var = tk.StringVar(value="Cost: 0.00 | Revenue: 0.00 | Profit: 0.00")
        self.book_map: dict[str, str] = {}

        self._build()

    def _build(self):
        tab = self.frame

        form = ttk.LabelFrame(tab, text="New sale")
        form.pack(fill="x", padx=10, pady=10)
        self.form_box = form

        ttk.Label(form, text="Customer").grid(row=0, column=0, padx=10, pady=6, sticky="w")
        self.customer_e = ttk.Entry(form, width=30)
        self.customer_e.grid(row=0, column=1, padx=10, pady=6, sticky="w")

        ttk.Label(form, text="Book").grid(row=0, column=2, padx=10, pady=6, sticky="w")
        self.combo = ttk.Combobox(form, textvariable=self.book_pick, width=44, state="readonly")
        self.combo.grid(row=0, column=3, padx=10, pady=6, sticky="w")
        self.combo.bind("<<ComboboxSelected>>", lambda _e: self.update_totals())

        ttk.Label(form, text="Qty").grid(row=1, column=0, padx=10, pady=6, sticky="w")
        self.qty_e = ttk.Entry(form, width=10)
        self.qty_e.grid(row=1, column=1, padx=10, pady=6, sticky="w")

        ttk.Label(form, text="Selling price").grid(row=1, column=2, padx=10, pady=6, sticky="w")
        self.price_e = ttk.Entry(form, width=12)
        self.price_e.grid(row=1, column=3, padx=10, pady=6, sticky="w")

        for e in (self.qty_e, self.price_e):
            e.bind("<KeyRelease>", lambda _e: self.update_totals())
            e.bind("<Return>", lambda _e: self.on_submit())

        ttk.Label(form, textvariable=self.totals_var).grid(row=2, column=0, columnspan=3, padx=10, pady=6, sticky="w")

        btns = ttk.Frame(form)
        btns.grid(row=2, column=3, padx=10, pady=6, sticky="e")
        self.submit_btn = ttk.Button(btns, text="Save sale", style="Big.TButton", command=self.on_submit)
        self.submit_btn.pack(side="left")
        ttk.Button(btns, text="Cancel", command=self.clear_form).pack(side="left", padx=(10, 0))

        hist = ttk.LabelFrame(tab, text="Sales")
        hist.pack(fill="both", expand=True, padx=10, pady=(0, 10))

        top = ttk.Frame(hist)
        top.pack(fill="x", padx=10, pady=8)
        ttk.Radiobutton(top, text="Pending", value="pending", variable=self.view_mode, command=self.refresh_list)\
            .pack(side="left")
        ttk.Radiobutton(top, text="Completed", value="completed", variable=self.view_mode, command=self.refresh_list)\
            .pack(side="left", padx=10)
        ttk.Button(top, text="Delete", command=self.on_delete).pack(side="right")
        ttk.Button(top, text="Edit", command=self.on_edit).pack(side="right", padx=10)
        ttk.Button(top, text="Complete", command=self.on_complete).pack(side="right")

        cols = ("id", "date", "customer", "book", "qty", "wholesale", "selling", "profit")
        self.tree = ttk.Treeview(hist, columns=cols, show="headings", height=12)
        heads = {
            "id": "ID", "date": "Date", "customer": "Customer", "book": "Book", "qty": "Qty",
            "wholesale": "Wholesale", "selling": "Selling", "profit": "Profit",
        }
        widths = {"id": 0, "date": 190, "customer": 200, "book": 300, "qty": 60, "wholesale": 100, "selling": 100, "profit": 100}
        for c in cols:
            self.tree.heading(c, text=heads[c])
            self.tree.column(c, width=widths[c], anchor="w", stretch=c != "id")
        self.tree.tag_configure("short", background="#fff4cc")
        self.tree.pack(fill="both", expand=True, padx=10, pady=(0, 10))

    def refresh(self):
        self.refresh_book_choices()
        self.refresh_list()

    def refresh_book_choices(self):
        choices = []
        mapping = {}
        for b in self.app.inventory.available_books():
            label = f"{b.name} (stock: {b.quantity}, cost: {b.price_per_unit:.2f})"
            choices.append(label)
            mapping[label] = b.id
        self.book_map = mapping
        self.combo["values"] = choices

    def refresh_list(self):
        for item in self.tree.get_children():
            self.tree.delete(item)

        pending = self.view_mode.get() == "pending"
        rows = self.app.sales.list_pending() if pending else self.app.sales.list_completed()
        for s in rows:
            short = pending and not self.app.sales.check_stock_availability(s)
            self.tree.insert("", "end", values=(
                s.id, s.date, s.customer_name, s.book_name, s.quantity,
                f"{s.wholesale_price:.2f}", f"{s.selling_price:.2f}", format_number(s.profit),
            ), tags=("short",) if short else ())

    def _selected_book(self):
        book_id = self.book_map.get(self.book_pick.get())
        return self.app.store.find_book(book_id) if book_id else None

    def update_totals(self):
        book = self._selected_book()
        wholesale = book.price_per_unit if book else 0
        if self.editing_id:
            wholesale = self.app.sales.get_sale(self.editing_id).wholesale_price
        cost, revenue, profit = self.app.sales.preview_totals(self.qty_e.get(), wholesale, self.price_e.get())
        self.totals_var.set(
            f"Cost: {format_number(cost)} | Revenue: {format_number(revenue)} | Profit: {format_number(profit)}"
        )

    def _selected_sale_id(self) -> str | None:
        sel = self.tree.selection()
        if not sel:
            messagebox.showwarning("Sales", "Select a sale.", parent=self.frame)
            return None
        return str(self.tree.item(sel[0], "values")[0])

    def on_submit(self):
        try:
            if self.editing_id:
                self.app.sales.edit_sale(self.editing_id, self.customer_e.get(), self.qty_e.get(), self.price_e.get())
                self.app.toast("Sale updated.", kind="success")
            else:
                book_id = self.book_map.get(self.book_pick.get())
                if not book_id:
                    messagebox.showwarning("Validation", "Pick a book from the list.", parent=self.frame)
                    return
                self.app.sales.create_sale(self.customer_e.get(), book_id, self.qty_e.get(), self.price_e.get())
                self.app.toast("Sale saved.", kind="success")
            self.clear_form()
        except Exception as e:
            self.app.handle_error("Sale", e, "Failed to save sale.")

    def on_edit(self):
        sale_id = self._selected_sale_id()
        if not sale_id:
            return
        try:
            sale = self.app.sales.get_sale(sale_id)
            if sale.completed:
                raise ValidationError("Only pending sales can be edited.")
            if not self.app.sales.check_stock_availability(sale):
                messagebox.showwarning("Stock", "Requested quantity is not currently in stock.", parent=self.frame)
                return
        except Exception as e:
            self.app.handle_error("Edit sale", e, "Failed to load sale.")
            return

        self.clear_form()
        self.editing_id = sale.id
        self.customer_e.insert(0, sale.customer_name)
        self.qty_e.insert(0, str(sale.quantity))
        self.price_e.insert(0, str(sale.selling_price))
        self.book_pick.set(sale.book_name)
        self.combo.config(state="disabled")
        self.form_box.config(text="Edit sale")
        self.submit_btn.config(text="Update sale")
        self.update_totals()

    def on_complete(self):
        sale_id = self._selected_sale_id()
        if not sale_id:
            return
        try:
            self.app.sales.complete_sale(sale_id)
            self.app.toast("Sale completed.", kind="success")
        except Exception as e:
            self.app.handle_error("Complete sale", e, "Failed to complete sale.")

    def on_delete(self):
        sale_id = self._selected_sale_id()
        if not sale_id:
            return
        if not messagebox.askyesno("Confirm delete", "Delete this sale?", parent=self.frame):
            return
        try:
            self.app.sales.delete_sale(sale_id)
            self.app.toast("Sale deleted.", kind="success")
        except Exception as e:
            self.app.handle_error("Delete sale", e, "Failed to delete sale.")

    def clear_form(self):
        self.editing_id = None
        self.combo.config(state="readonly")
        self.book_pick.set("")
        for e in (self.customer_e, self.qty_e, self.price_e):
            e.delete(0, tk.END)
        self.form_box.config(text="New sale")
        self.submit_btn.config(text="Save sale")
        self.update_totals()
