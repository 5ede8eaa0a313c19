import logging
from pathlib import Path
from typing import List

import pandas as pd

import config
from models.table_model import TableModel

logger = logging.getLogger(__name__)


class CSVServiceError(Exception):
    pass


class ParseError(CSVServiceError):
    """Documento vacío: no hay línea de encabezado."""


class CSVService:
    """
    Codec CSV permisivo (texto <-> TableModel).
    - Separador de registros: solo salto de línea (LF).
    - Separador de campos: coma. Sin comillas ni escapes: una coma dentro
      de un campo entrecomillado se trata como separador.
    - Filas cortas se rellenan con "", filas largas se truncan.
    """

    FILLER = ""

    @staticmethod
    def decode(text: str) -> TableModel:
        if not text:
            raise ParseError("El documento está vacío: no hay encabezado.")

        lines = text.split("\n")
        # Un separador final no genera una fila fantasma
        if len(lines) > 1 and lines[-1] == "":
            lines.pop()

        headers = lines[0].split(",")
        model = TableModel(headers)

        short_rows, long_rows = 0, 0
        for line in lines[1:]:
            values = line.split(",")
            if len(values) < len(headers):
                short_rows += 1
                values = values + [CSVService.FILLER] * (len(headers) - len(values))
            elif len(values) > len(headers):
                long_rows += 1
            model.add_row(dict(zip(headers, values)))

        if short_rows or long_rows:
            logger.warning("CSV irregular: %d filas cortas rellenadas, %d filas largas truncadas",
                           short_rows, long_rows)
        logger.debug("Decodificadas %d columnas y %d filas", len(headers), len(model))
        return model

    @staticmethod
    def encode(model: TableModel) -> str:
        headers = model.headers()
        lines: List[str] = [",".join(headers)]
        for row in model.rows():
            lines.append(",".join(row[h] for h in headers))
        return "\n".join(lines)

    # --- ARCHIVOS ---
    @staticmethod
    def read_file(path) -> TableModel:
        path = Path(path)
        text = None
        for enc in config.ENCODINGS:
            try:
                # Lectura con newline universal: CRLF llega como LF al codec
                with open(path, "r", encoding=enc) as f:
                    text = f.read()
                logger.debug("Leído %s con codificación %s", path, enc)
                break
            except UnicodeDecodeError:
                continue
            except OSError as e:
                raise CSVServiceError(f"Error de lectura: {e}") from e

        if text is None:
            raise CSVServiceError("No se pudo leer el archivo (revise codificación).")
        return CSVService.decode(text)

    @staticmethod
    def write_file(path, model: TableModel):
        text = CSVService.encode(model)
        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                # LF final: decode descarta solo esa línea vacía, no la última fila
                f.write(text + "\n")
        except OSError as e:
            raise CSVServiceError(f"Error de escritura: {e}") from e

    @staticmethod
    def export_excel(path, model: TableModel, sheet_name: str = config.EXCEL_SHEET_NAME):
        headers = model.headers()
        # Columnas por posición: admite encabezados duplicados
        data = [[row[h] for h in headers] for row in model.rows()]
        df = pd.DataFrame(data, columns=list(headers), dtype=str)

        try:
            with pd.ExcelWriter(path, engine="openpyxl") as writer:
                df.to_excel(writer, sheet_name=sheet_name, index=False)
                sheet = writer.sheets[sheet_name]
                for column in sheet.columns:
                    column = [cell for cell in column]
                    max_length = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
                    sheet.column_dimensions[column[0].column_letter].width = max_length + 2
        except OSError as e:
            raise CSVServiceError(f"Error al exportar Excel: {e}") from e
