from __future__ import annotations

import tkinter as tk
from tkinter import ttk, messagebox
import logging

from bsm.domain.errors import ValidationError


log = logging.getLogger(__name__)


class InventoryView:
    def __init__(self, notebook: ttk.Notebook, app):
        self.app = app
        self.frame = ttk.Frame(notebook)
        notebook.add(self.frame, text="Inventory")

        self.editing_id: str | None = None
        self.search_var = tk.StringVar()
        self.form_title = tk.StringVar(value="Add book")

        tab = self.frame
        left = ttk.LabelFrame(tab, text="Book", width=280)
        left.pack(side="left", fill="y", padx=(0, 6), pady=8)
        left.pack_propagate(False)

        ttk.Label(left, textvariable=self.form_title, style="Title.TLabel")\
            .grid(row=0, column=0, columnspan=2, sticky="w", padx=8, pady=(8, 4))
        self.b_name = self._entry(left, "Name", 1)
        self.b_qty = self._entry(left, "Quantity", 2)
        self.b_price = self._entry(left, "Price per unit", 3)

        btns = ttk.Frame(left)
        btns.grid(row=4, column=0, columnspan=2, sticky="ew", padx=8, pady=(6, 8))
        for i in range(3):
            btns.columnconfigure(i, weight=1)

        self.save_btn = ttk.Button(btns, text="Add", command=self.on_save)
        self.save_btn.grid(row=0, column=0, sticky="ew", padx=(0, 6))
        ttk.Button(btns, text="Delete", command=self.on_delete).grid(row=0, column=1, sticky="ew", padx=6)
        ttk.Button(btns, text="Cancel", command=self.clear_form).grid(row=0, column=2, sticky="ew", padx=(6, 0))

        for entry in (self.b_name, self.b_qty, self.b_price):
            entry.bind("<Return>", self._on_enter)

        right = ttk.LabelFrame(tab, text="Books (double click to edit)")
        right.pack(side="right", fill="both", expand=True, pady=8)

        search = ttk.Frame(right)
        search.pack(fill="x", padx=6, pady=(6, 0))
        ttk.Label(search, text="Search").pack(side="left")
        search_e = ttk.Entry(search, textvariable=self.search_var, width=40)
        search_e.pack(side="left", padx=8)
        search_e.bind("<KeyRelease>", lambda _e: self.refresh())

        tree_wrap = ttk.Frame(right)
        tree_wrap.pack(fill="both", expand=True, padx=6, pady=6)

        cols = ("id", "name", "qty", "price", "total")
        self.tree = ttk.Treeview(tree_wrap, columns=cols, show="headings", height=20)
        heads = {"id": "ID", "name": "Name", "qty": "Quantity", "price": "Price/unit", "total": "Total cost"}
        widths = {"id": 0, "name": 360, "qty": 90, "price": 110, "total": 120}
        for c in cols:
            self.tree.heading(c, text=heads[c])
            self.tree.column(c, width=widths[c], anchor="w", stretch=c != "id")
        self.tree.tag_configure("empty", background="#ffdddd")
        self.tree.bind("<Double-1>", self.on_edit)

        vsb = ttk.Scrollbar(tree_wrap, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=vsb.set)
        self.tree.grid(row=0, column=0, sticky="nsew")
        vsb.grid(row=0, column=1, sticky="ns")
        tree_wrap.columnconfigure(0, weight=1)
        tree_wrap.rowconfigure(0, weight=1)

    def _entry(self, parent, label, row):
        ttk.Label(parent, text=label).grid(row=row, column=0, sticky="w", padx=8, pady=4)
        e = ttk.Entry(parent, width=16)
        e.grid(row=row, column=1, sticky="ew", padx=8, pady=4)
        parent.columnconfigure(1, weight=1)
        return e

    def _on_enter(self, _event=None):
        self.on_save()
        return "break"

    def _selected_id(self) -> str | None:
        selected = self.tree.selection()
        if not selected:
            return None
        return str(self.tree.item(selected[0], "values")[0])

    def on_save(self):
        try:
            if self.editing_id:
                self.app.inventory.update_book(self.editing_id, self.b_qty.get(), self.b_price.get())
                self.app.toast("Book updated.", kind="success")
            else:
                book = self.app.inventory.add_book(self.b_name.get(), self.b_qty.get(), self.b_price.get())
                self.app.toast(f"Book saved: {book.name}", kind="success")
            self.clear_form()
        except Exception as e:
            self.app.handle_error("Book", e, "Failed to save book.")

    def on_edit(self, _evt=None):
        book_id = self._selected_id()
        if not book_id:
            return
        try:
            book = self.app.inventory.get_book(book_id)
        except Exception as e:
            self.app.handle_error("Edit book", e, "Failed to load book.")
            return
        self.clear_form()
        self.editing_id = book.id
        self.b_name.insert(0, book.name)
        self.b_name.config(state="disabled")
        self.b_qty.insert(0, str(book.quantity))
        self.b_price.insert(0, str(book.price_per_unit))
        self.form_title.set("Edit book")
        self.save_btn.config(text="Update")
        self.search_var.set("")

    def on_delete(self):
        try:
            book_id = self._selected_id()
            if not book_id:
                raise ValidationError("Select a book.")
            book = self.app.inventory.get_book(book_id)
            confirmed = messagebox.askyesno(
                "Confirm delete",
                f"Delete '{book.name}'?\n\nSales that reference it are kept.",
                parent=self.frame,
            )
            if not confirmed:
                return
            self.app.inventory.delete_book(book_id)
            self.app.toast("Book deleted.", kind="success")
        except Exception as e:
            self.app.handle_error("Delete book", e, "Failed to delete book.")

    def clear_form(self):
        self.editing_id = None
        self.b_name.config(state="normal")
        for e in (self.b_name, self.b_qty, self.b_price):
            e.delete(0, tk.END)
        self.form_title.set("Add book")
        self.save_btn.config(text="Add")
        self.b_name.focus_set()

    def refresh(self):
        for item in self.tree.get_children():
            self.tree.delete(item)

        for b in self.app.inventory.search_books(self.search_var.get()):
            self.tree.insert(
                "", "end",
                values=(b.id, b.name, b.quantity, f"{b.price_per_unit:.2f}", f"{b.total_cost:.2f}"),
                tags=("empty",) if b.quantity <= 0 else (),
            )
