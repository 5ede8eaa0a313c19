import tkinter as tk
from tkinter import ttk

import config


class TableView(ttk.Frame):
    """
    Treeview de solo lectura; cada item usa como iid el índice de fila del modelo.
    on_search recibe (term: str), on_activate recibe (index: int) al hacer doble clic.
    """

    def __init__(self, parent, on_search=None, on_activate=None, *args, **kwargs):
        super().__init__(parent, *args, **kwargs)
        self.on_search = on_search
        self.on_activate = on_activate
        control_frame = ttk.Frame(self)
        control_frame.pack(fill="x", pady=(0, 5))
        ttk.Label(control_frame, text="Buscar:").pack(side="left", padx=(0, 5))
        self.search_var = tk.StringVar()
        self.search_entry = ttk.Entry(control_frame, textvariable=self.search_var, width=30)
        self.search_entry.pack(side="left", padx=(0, 10))
        self.search_entry.bind("<KeyRelease>", self._on_search)
        self.clear_search_btn = ttk.Button(control_frame, text="Limpiar", command=self._clear_search)
        self.clear_search_btn.pack(side="left")
        self.status_label = ttk.Label(control_frame, text="")
        self.status_label.pack(side="right")
        tree_frame = ttk.Frame(self)
        tree_frame.pack(fill="both", expand=True)
        self._tree = ttk.Treeview(tree_frame, show="headings", selectmode="browse")
        self._tree.pack(side="left", fill="both", expand=True)
        self._tree.bind("<Double-1>", self._on_double_click)
        self._scroll_y = ttk.Scrollbar(tree_frame, orient="vertical", command=self._tree.yview)
        self._scroll_y.pack(side="right", fill="y")
        self._tree.configure(yscrollcommand=self._scroll_y.set)
        self._scroll_x = ttk.Scrollbar(self, orient="horizontal", command=self._tree.xview)
        self._scroll_x.pack(side="bottom", fill="x")
        self._tree.configure(xscrollcommand=self._scroll_x.set)
        self._total = 0

    def search_term(self) -> str:
        return self.search_var.get()

    def _on_search(self, event=None):
        if self.on_search:
            self.on_search(self.search_var.get())

    def _clear_search(self):
        self.search_var.set("")
        self._on_search()

    def _on_double_click(self, event):
        item = self._tree.identify_row(event.y)
        if item and self.on_activate:
            self.on_activate(int(item))

    def get_selected_index(self):
        sel = self._tree.selection()
        return int(sel[0]) if sel else None

    def clear(self):
        for r in self._tree.get_children(): self._tree.delete(r)
        self._tree["columns"] = ()
        self.status_label.config(text="")

    def update_table(self, headers, indexed_rows, total=None):
        self.clear()
        if not headers: return
        # Ids posicionales: los encabezados pueden repetirse
        col_ids = [f"c{i}" for i in range(len(headers))]
        self._tree["columns"] = tuple(col_ids)
        for cid, header in zip(col_ids, headers):
            self._tree.heading(cid, text=header)
            self._tree.column(cid, anchor="w", width=config.COLUMN_WIDTH)
        for index, row in indexed_rows:
            self._tree.insert("", "end", iid=str(index), values=tuple(row.get(h, "") for h in headers))
        self._total = len(indexed_rows) if total is None else total
        if len(indexed_rows) == self._total:
            self.status_label.config(text=f"Total: {self._total} registros")
        else:
            self.status_label.config(text=f"Mostrando {len(indexed_rows)} de {self._total} registros")
