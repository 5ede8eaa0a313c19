import logging
import tkinter as tk
from tkinter import ttk, filedialog, messagebox, simpledialog

import config
from controllers.csv_controller import CSVController
from ui.row_dialog import RowDialog
from ui.table_view import TableView

logger = logging.getLogger(__name__)


class MainWindow:
    def __init__(self, controller=None):
        self.controller = controller or CSVController()

        self.window = tk.Tk()
        self.window.title(config.WINDOW_TITLE)
        self.window.geometry(config.WINDOW_GEOMETRY)
        self.window.protocol("WM_DELETE_WINDOW", self.on_closing)

        self.toolbar = ttk.Frame(self.window, relief=tk.RAISED, borderwidth=1)
        self.toolbar.pack(side="top", fill="x")
        ttk.Button(self.toolbar, text="📂 Cargar CSV", command=self.load_csv_action).pack(side="left", padx=5, pady=5)
        ttk.Button(self.toolbar, text="📄 Nuevo", command=self.new_document_action).pack(side="left", padx=5, pady=5)
        ttk.Separator(self.toolbar, orient="vertical").pack(side="left", fill="y", padx=10, pady=5)
        self.btn_add = ttk.Button(self.toolbar, text="➕ Agregar Fila", command=self.add_row_action)
        self.btn_add.pack(side="left", padx=5, pady=5)
        self.btn_edit = ttk.Button(self.toolbar, text="✏️ Editar", command=lambda: self.edit_row_action())
        self.btn_edit.pack(side="left", padx=5, pady=5)
        self.btn_delete = ttk.Button(self.toolbar, text="🗑️ Eliminar", command=self.delete_row_action)
        self.btn_delete.pack(side="left", padx=5, pady=5)
        self.btn_export_xlsx = ttk.Button(self.toolbar, text="💾 Exportar Excel", command=self.export_excel_action)
        self.btn_export_xlsx.pack(side="right", padx=5, pady=5)
        self.btn_download = ttk.Button(self.toolbar, text="⬇️ Descargar CSV", command=self.save_csv_action)
        self.btn_download.pack(side="right", padx=5, pady=5)

        self.status_frame = ttk.Frame(self.window, relief=tk.SUNKEN, padding=(5, 2))
        self.status_frame.pack(side="bottom", fill="x")
        self.lbl_status = ttk.Label(self.status_frame, text="Listo", anchor="w")
        self.lbl_status.pack(side="left", fill="x")
        self.progress = ttk.Progressbar(self.status_frame, mode='indeterminate', length=200)

        self.table = TableView(self.window, on_search=lambda term: self.refresh_table(), on_activate=self.edit_row_action)
        self.table.pack(fill="both", expand=True, padx=10, pady=10)

        self._update_actions()

    def run_task(self, description, func):
        self.window.config(cursor="watch")
        self.lbl_status.config(text=f"⏳ {description}...")
        self.progress.pack(side="right", padx=10)
        self.progress.start(10)
        self.window.update()
        try:
            func()
            self.lbl_status.config(text="✅ Listo")
        except Exception as e:
            logger.exception("Fallo en tarea: %s", description)
            self.lbl_status.config(text="❌ Error")
            messagebox.showerror("Error", str(e))
        finally:
            self.progress.stop()
            self.progress.pack_forget()
            self.window.config(cursor="")

    def refresh_table(self):
        if not self.controller.is_loaded:
            self.table.clear()
        else:
            matches = self.controller.search(self.table.search_term())
            self.table.update_table(self.controller.headers(), matches, total=len(self.controller.model))
        self._update_actions()

    def _update_actions(self):
        state = "normal" if self.controller.is_loaded else "disabled"
        for btn in (self.btn_add, self.btn_edit, self.btn_delete, self.btn_download, self.btn_export_xlsx):
            btn.config(state=state)
        name = self.controller.source_path.name if self.controller.source_path else None
        self.window.title(f"{config.WINDOW_TITLE} - {name}" if name else config.WINDOW_TITLE)

    # --- DOCUMENTO ---
    def load_csv_action(self):
        path = filedialog.askopenfilename(filetypes=[("CSV", "*.csv"), ("Todos", "*.*")])
        if not path: return
        self.open_path(path)

    def open_path(self, path):
        def _load():
            self.controller.load_csv(path)
            self.refresh_table()
        self.run_task("Cargando archivo", _load)

    def new_document_action(self):
        raw = simpledialog.askstring("Nuevo documento", "Columnas (separadas por coma):", parent=self.window)
        if raw is None: return
        headers = raw.split(",")
        def _new():
            self.controller.new_document(headers)
            self.refresh_table()
        self.run_task("Creando documento", _new)

    # --- FILAS ---
    def add_row_action(self):
        if not self.controller.is_loaded: return
        RowDialog(self.window, "Agregar fila", self.controller.headers(), values=self.controller.draft,
                  submit_text="Agregar", on_change=self.controller.set_draft_value,
                  on_submit=lambda values: self.run_task("Agregando fila", self._add_row))

    def _add_row(self):
        self.controller.add_row()
        self.refresh_table()

    def edit_row_action(self, index=None):
        if index is None: index = self.table.get_selected_index()
        if index is None:
            messagebox.showinfo("Editar", "Seleccione una fila.")
            return
        self.run_task("Abriendo fila", lambda: self._open_edit_dialog(index))

    def _open_edit_dialog(self, index):
        values = self.controller.begin_edit(index)
        dialog = RowDialog(self.window, f"Editar fila {index + 1}", self.controller.headers(), values=values,
                           on_change=self.controller.set_draft_value,
                           on_submit=lambda _: self.run_task("Guardando fila", self._commit_edit))
        dialog.bind("<Destroy>", lambda e: self.controller.cancel_edit() if e.widget is dialog else None, add="+")

    def _commit_edit(self):
        self.controller.commit_edit()
        self.refresh_table()

    def delete_row_action(self):
        index = self.table.get_selected_index()
        if index is None:
            messagebox.showinfo("Eliminar", "Seleccione una fila.")
            return
        if not messagebox.askyesno("Eliminar", f"¿Eliminar la fila {index + 1}?"): return
        def _delete():
            self.controller.delete_row(index)
            self.refresh_table()
        self.run_task("Eliminando fila", _delete)

    # --- EXPORTACIÓN ---
    def save_csv_action(self):
        path = filedialog.asksaveasfilename(initialfile=config.DEFAULT_EXPORT_NAME, defaultextension=".csv",
                                            filetypes=[("CSV", "*.csv")])
        if not path: return
        self.run_task("Guardando CSV", lambda: self.controller.save_csv(path))

    def export_excel_action(self):
        stem = config.DEFAULT_EXPORT_NAME.rsplit(".", 1)[0]
        path = filedialog.asksaveasfilename(initialfile=f"{stem}.xlsx", defaultextension=".xlsx",
                                            filetypes=[("Excel", "*.xlsx")])
        if not path: return
        self.run_task("Exportando Excel", lambda: self.controller.export_excel(path))

    def on_closing(self):
        if messagebox.askokcancel("Salir", "¿Seguro que quieres salir?"):
            self.window.destroy()
