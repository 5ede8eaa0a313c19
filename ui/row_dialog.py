import tkinter as tk
from tkinter import ttk


class RowDialog(tk.Toplevel):
    """
    Formulario modal con un Entry por encabezado.
    on_change recibe (header, value) en cada tecla; on_submit se llama al confirmar.
    """

    def __init__(self, parent, title, headers, values=None, submit_text="Guardar",
                 on_change=None, on_submit=None):
        super().__init__(parent)
        self.title(title)
        self.transient(parent)
        self.resizable(False, False)
        self.on_change = on_change
        self.on_submit = on_submit
        values = values or {}

        form = ttk.Frame(self, padding=10)
        form.pack(fill="both", expand=True)
        self._entries = {}
        for i, header in enumerate(headers):
            # Encabezados repetidos comparten el mismo Entry
            if header in self._entries: continue
            ttk.Label(form, text=header or "(sin nombre)").grid(row=i, column=0, sticky="e", padx=(0, 8), pady=3)
            var = tk.StringVar(value=values.get(header, ""))
            var.trace_add("write", lambda *_, h=header, v=var: self._handle_change(h, v))
            entry = ttk.Entry(form, textvariable=var, width=40)
            entry.grid(row=i, column=1, sticky="we", pady=3)
            self._entries[header] = var

        btns = ttk.Frame(self, padding=(10, 0, 10, 10))
        btns.pack(fill="x")
        ttk.Button(btns, text=submit_text, command=self._submit).pack(side="right")
        ttk.Button(btns, text="Cancelar", command=self.destroy).pack(side="right", padx=5)
        self.bind("<Return>", lambda e: self._submit())
        self.bind("<Escape>", lambda e: self.destroy())

        self.grab_set()
        first = form.grid_slaves(row=0, column=1)
        if first: first[0].focus_set()

    def _handle_change(self, header, var):
        if self.on_change:
            self.on_change(header, var.get())

    def values(self):
        return {h: v.get() for h, v in self._entries.items()}

    def _submit(self):
        if self.on_submit:
            self.on_submit(self.values())
        self.destroy()
