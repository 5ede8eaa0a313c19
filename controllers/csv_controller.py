import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from models.table_model import TableModel, TableModelError
from services.csv_service import CSVService, CSVServiceError

logger = logging.getLogger(__name__)


class EditContext:
    """Estado de sesión de la vista: fila en edición y borrador del formulario."""

    def __init__(self):
        self.editing_row: int | None = None
        self.draft: Dict[str, str] = {}

    def clear(self):
        self.editing_row = None
        self.draft = {}


class CSVController:
    def __init__(self, model: Optional[TableModel] = None):
        self.model = model if model is not None else TableModel()
        self.session = EditContext()
        self.source_path: Path | None = None

    # --- DOCUMENTO ---
    def load_csv(self, path) -> TableModel:
        try:
            model = CSVService.read_file(path)
        except CSVServiceError:
            logger.warning("No se pudo cargar %s", path)
            raise
        except Exception as e:
            logger.warning("Error inesperado al leer %s: %s", path, e)
            raise CSVServiceError(f"Error inesperado al leer CSV: {e}") from e

        self._replace_model(model)
        self.source_path = Path(path)
        logger.info("Cargado %s: %d columnas, %d filas", path, len(model.headers()), len(model))
        return self.model

    def load_text(self, text: str) -> TableModel:
        self._replace_model(CSVService.decode(text))
        self.source_path = None
        return self.model

    def new_document(self, headers: Sequence[str]) -> TableModel:
        self.model.new_document(headers)
        self.session.clear()
        self.source_path = None
        logger.info("Nuevo documento: %s", ", ".join(self.model.headers()))
        return self.model

    def reset(self):
        self.model.reset()
        self.session.clear()
        self.source_path = None

    def _replace_model(self, model: TableModel):
        # Se conserva la misma instancia: la UI mantiene la referencia
        self.model.new_document(model.headers())
        for row in model.rows():
            self.model.add_row(row)
        self.session.clear()

    @property
    def is_loaded(self) -> bool:
        return self.model.is_loaded

    def headers(self) -> Tuple[str, ...]:
        return self.model.headers()

    def rows(self) -> List[Dict[str, str]]:
        return self.model.rows()

    # --- EDICIÓN ---
    @property
    def editing_row(self) -> int | None:
        return self.session.editing_row

    @property
    def draft(self) -> Dict[str, str]:
        return dict(self.session.draft)

    def begin_edit(self, index: int) -> Dict[str, str]:
        row = self.model.row(index)
        self.session.editing_row = index
        self.session.draft = row
        return dict(row)

    def set_draft_value(self, header: str, value):
        self.session.draft[header] = "" if value is None else str(value)

    def commit_edit(self):
        if self.session.editing_row is None:
            raise CSVServiceError("No hay ninguna fila en edición.")
        index = self.session.editing_row
        self.model.update_row(index, self.session.draft)
        logger.info("Fila %d actualizada", index)
        self.session.clear()

    def cancel_edit(self):
        self.session.clear()

    def add_row(self, values: Optional[Mapping] = None):
        self.model.add_row(self.session.draft if values is None else values)
        logger.info("Fila agregada (total %d)", len(self.model))
        if self.session.editing_row is None:
            self.session.draft = {}

    def delete_row(self, index: int):
        self.model.delete_row(index)
        logger.info("Fila %d eliminada (quedan %d)", index, len(self.model))
        editing = self.session.editing_row
        if editing is None:
            return
        if editing == index:
            self.session.clear()
        elif editing > index:
            self.session.editing_row = editing - 1

    # --- BÚSQUEDA ---
    def search(self, term: str) -> List[Tuple[int, Dict[str, str]]]:
        rows = list(enumerate(self.model.rows()))
        term = (term or "").lower()
        if not term:
            return rows
        return [(i, r) for i, r in rows if any(term in v.lower() for v in r.values())]

    # --- EXPORTACIÓN ---
    def export_text(self) -> str:
        return CSVService.encode(self.model)

    def save_csv(self, path):
        try:
            CSVService.write_file(path, self.model)
        except (CSVServiceError, TableModelError):
            logger.warning("No se pudo guardar %s", path)
            raise
        except Exception as e:
            logger.warning("Error inesperado al guardar %s: %s", path, e)
            raise CSVServiceError(f"Error inesperado al guardar CSV: {e}") from e
        logger.info("Guardado %s (%d filas)", path, len(self.model))

    def export_excel(self, path):
        try:
            CSVService.export_excel(path, self.model)
        except (CSVServiceError, TableModelError):
            logger.warning("No se pudo exportar %s", path)
            raise
        except Exception as e:
            logger.warning("Error inesperado al exportar %s: %s", path, e)
            raise CSVServiceError(f"Error inesperado al exportar Excel: {e}") from e
        logger.info("Exportado Excel %s", path)
