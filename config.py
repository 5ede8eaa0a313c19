"""Configuración compartida del editor CSV."""

import os

# Orden de prueba al leer archivos
ENCODINGS = ("utf-8-sig", "utf-8", "latin-1", "cp1252")

DEFAULT_EXPORT_NAME = "edited_data.csv"
EXCEL_SHEET_NAME = "Datos"

WINDOW_TITLE = "CSV Editor"
WINDOW_GEOMETRY = "1100x700"
COLUMN_WIDTH = 180

DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def log_level() -> str:
    """Nivel de log desde CSV_EDITOR_LOG_LEVEL (admite .env)."""
    return os.environ.get("CSV_EDITOR_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
