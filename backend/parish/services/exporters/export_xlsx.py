from __future__ import annotations

from io import BytesIO
from typing import Iterable

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter

from parish.domain.models import ScheduleVolunteer

# =========================
# Utilidades
# =========================

def _autosize_columns(ws, max_width: int = 60):
    """Ajusta a largura das colunas com base no conteúdo.

    Args:
        ws (Worksheet): A planilha do Excel.
        max_width (int, optional): A largura máxima da coluna. Defaults to 60.
    """
    for col_idx, column_cells in enumerate(ws.columns, start=1):
        length = 0
        for cell in column_cells:
            v = "" if cell.value is None else str(cell.value)
            length = max(length, len(v))
        ws.column_dimensions[get_column_letter(col_idx)].width = min(max(10, length + 2), max_width)

def _header(ws, labels: Iterable[str]):
    """Escreve o cabeçalho da planilha.

    Args:
        ws (Worksheet): A planilha do Excel.
        labels (Iterable[str]): Os rótulos das colunas.
    """
    ws.append(list(labels))
    for cell in ws[1]:
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal="center")
    ws.freeze_panes = "A2"

# =========================
# Export principal
# =========================

def export_participations_xlsx(participations: Iterable[ScheduleVolunteer]) -> bytes:
    """Exporta o relatório de participações para XLSX.

    Args:
        participations (Iterable[ScheduleVolunteer]): Participações com escala, ministério e voluntário carregados.

    Returns:
        bytes: O conteúdo do arquivo XLSX.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = "Escalas"
    _header(ws, ["Data", "Hora", "Tipo", "Ministério", "Voluntário", "Status", "Motivo da troca"])

    for p in participations:
        s = p.schedule
        row = ws.max_row + 1
        c_data = ws.cell(row=row, column=1, value=s.date)
        c_time = ws.cell(row=row, column=2, value=s.time)
        ws.cell(row=row, column=3, value=s.type)
        ws.cell(row=row, column=4, value=s.ministry.name)
        ws.cell(row=row, column=5, value=p.volunteer.name)
        ws.cell(row=row, column=6, value=p.get_status_display())
        ws.cell(row=row, column=7, value=p.change_reason or "")

        c_data.number_format = "DD/MM/YYYY"
        c_time.number_format = "HH:MM"
        c_data.alignment = Alignment(horizontal="center")
        c_time.alignment = Alignment(horizontal="center")
    _autosize_columns(ws)

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()
