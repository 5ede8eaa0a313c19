import logging
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


class TableModelError(Exception):
    pass


class NotLoaded(TableModelError):
    """Operación CRUD sobre un modelo vacío (sin documento cargado)."""


class IndexOutOfRange(TableModelError, IndexError):
    """El índice no corresponde a ninguna fila actual."""


class TableModel:
    """
    Tabla en memoria:
      - headers: tupla ordenada de nombres de columna (fija una vez cargada)
      - rows: lista de dicts, cada uno con exactamente las claves de headers

    Estados:
      - Vacío: sin headers ni filas (estado inicial, o tras reset())
      - Cargado: headers fijos, cero o más filas
    """

    def __init__(self, headers: Optional[Sequence[str]] = None, rows: Optional[Sequence[Mapping]] = None):
        self._headers: Tuple[str, ...] | None = None
        self._rows: List[Dict[str, str]] = []
        if headers is None and rows:
            raise NotLoaded("Se recibieron filas sin encabezados.")
        if headers is not None:
            self.new_document(headers)
            for values in rows or []:
                self._rows.append(self._normalize(values))

    # --- ESTADO ---
    @property
    def is_loaded(self) -> bool:
        return self._headers is not None

    def new_document(self, headers: Sequence[str]):
        self._headers = tuple(str(h) for h in headers)
        self._rows = []
        logger.debug("Nuevo documento con %d columnas", len(self._headers))

    def reset(self):
        self._headers = None
        self._rows = []

    # --- VISTAS ---
    def headers(self) -> Tuple[str, ...]:
        self._require_loaded()
        return self._headers

    def rows(self) -> List[Dict[str, str]]:
        self._require_loaded()
        return [dict(r) for r in self._rows]

    def row(self, index: int) -> Dict[str, str]:
        self._check_index(index)
        return dict(self._rows[index])

    def __len__(self):
        return len(self._rows)

    def __eq__(self, other):
        if not isinstance(other, TableModel):
            return NotImplemented
        return self._headers == other._headers and self._rows == other._rows

    def __repr__(self):
        if not self.is_loaded:
            return "TableModel(<vacío>)"
        return f"TableModel(headers={list(self._headers)!r}, rows={len(self._rows)})"

    # --- CRUD ---
    def add_row(self, values: Mapping):
        self._require_loaded()
        self._rows.append(self._normalize(values))

    def update_row(self, index: int, values: Mapping):
        self._check_index(index)
        # Reemplazo completo, no merge
        self._rows[index] = self._normalize(values)

    def delete_row(self, index: int):
        self._check_index(index)
        del self._rows[index]

    # --- HELPERS INTERNOS ---
    def _normalize(self, values: Mapping) -> Dict[str, str]:
        values = values or {}
        row = {}
        for h in self._headers:
            v = values.get(h)
            row[h] = "" if v is None else str(v)
        return row

    def _require_loaded(self):
        if self._headers is None:
            raise NotLoaded("No hay ningún documento cargado.")

    def _check_index(self, index: int):
        self._require_loaded()
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(self._rows):
            raise IndexOutOfRange(f"Fila {index} fuera de rango (hay {len(self._rows)} filas).")
