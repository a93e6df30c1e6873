"""Tests for the branded Excel report."""

import io

import pytest
from openpyxl import load_workbook

from pretensa_reports.models import Branding, Column, ColumnFormat, ReportOptions, SummaryItem
from pretensa_reports.reports.excel_report import render_spreadsheet
from pretensa_reports.services.layout import sheet_column_widths


def _load(result):
    assert result.success, result.message
    return load_workbook(io.BytesIO(result.artifact.content))


def test_headers_only_report(headers_only_options, fixed_now) -> None:
    result = render_spreadsheet(headers_only_options, now=fixed_now)
    assert result.message == "Archivo Excel exportado exitosamente: reporte.xlsx"
    assert result.artifact.filename == "reporte.xlsx"
    assert result.artifact.mime_type.endswith("spreadsheetml.sheet")

    ws = _load(result).active
    # title, generation line, spacer, header
    assert ws.cell(row=1, column=1).value == "Reporte"
    assert ws.cell(row=2, column=1).value.startswith("Generado el 19 de octubre de 2026")
    assert ws.cell(row=4, column=1).value == "Name"
    assert ws.max_row == 6
    assert ws.cell(row=5, column=1).value is None
    assert ws.cell(row=6, column=1).value.startswith("Reporte - 0 registros |")
    assert ws.freeze_panes == "A5"


def test_full_report_layout(sample_options, fixed_now) -> None:
    ws = _load(render_spreadsheet(sample_options, now=fixed_now)).active

    assert ws.cell(row=1, column=1).value == "Estructuras Pretensa"
    assert "sistemas@pretensa.com.ar" in ws.cell(row=2, column=1).value
    assert ws.cell(row=4, column=1).value == "Inventario de Equipos"
    assert ws.cell(row=5, column=1).value == "Depósito central"
    assert "Total de registros: 3" in ws.cell(row=6, column=1).value

    header = [ws.cell(row=8, column=i).value for i in range(1, 6)]
    assert header == ["Nombre", "Cantidad", "Costo unitario", "Fecha de compra", "Descuento"]
    assert ws.freeze_panes == "A9"

    merged = {str(r) for r in ws.merged_cells.ranges}
    assert {"A1:E1", "A4:E4", "A13:E13"} <= merged
    assert ws.cell(row=13, column=1).value.startswith("Inventario de Equipos - 3 registros")


def test_typed_cells(sample_options, fixed_now) -> None:
    ws = _load(render_spreadsheet(sample_options, now=fixed_now)).active

    quantity = ws.cell(row=9, column=2)
    assert quantity.value == 12
    assert quantity.number_format == "#,##0"

    cost = ws.cell(row=9, column=3)
    assert cost.value == 1234.5
    assert cost.number_format == '"$"#,##0.00'

    assert ws.cell(row=9, column=4).value == "05/03/2024"
    assert ws.cell(row=9, column=5).number_format == "0.00%"

    # unparsable values
    assert ws.cell(row=11, column=2).value == 0
    assert ws.cell(row=11, column=3).value == 0
    assert ws.cell(row=11, column=4).value == "sin fecha"


def test_zebra_rows_and_header_style(sample_options, fixed_now) -> None:
    ws = _load(render_spreadsheet(sample_options, now=fixed_now)).active

    header = ws.cell(row=8, column=1)
    assert header.font.bold
    assert header.fill.fgColor.rgb == "FF1E5AA8"
    assert ws.cell(row=9, column=1).fill.fgColor.rgb == "FFFFFFFF"
    assert ws.cell(row=10, column=1).fill.fgColor.rgb == "FFF9FAFB"
    assert ws.cell(row=9, column=2).alignment.horizontal == "right"


def test_column_widths(sample_options, fixed_now) -> None:
    ws = _load(render_spreadsheet(sample_options, now=fixed_now)).active
    expected = sheet_column_widths(sample_options.columns, sample_options.data)
    actual = [ws.column_dimensions[letter].width for letter in "ABCDE"]
    assert actual == expected


def test_workbook_properties(sample_options, fixed_now) -> None:
    wb = _load(render_spreadsheet(sample_options, now=fixed_now))
    assert wb.properties.title == "Inventario de Equipos"
    assert wb.properties.creator == "Mesa de Ayuda"
    assert wb.properties.category == "Sistemas"
    assert wb.properties.keywords == "inventario, equipos"
    assert wb.active.sheet_properties.tabColor.rgb == "FF1E5AA8"


@pytest.mark.parametrize("branding", [None, Branding(), Branding(primary_color="azul")])
def test_spreadsheet_default_primary(sample_options, fixed_now, branding) -> None:
    # same fallback whether branding is absent, empty or invalid
    sample_options.branding = branding
    ws = _load(render_spreadsheet(sample_options, now=fixed_now)).active
    assert ws.sheet_properties.tabColor.rgb == "FF1E40AF"
    assert ws.cell(row=8, column=1).fill.fgColor.rgb == "FF1E40AF"


def test_huge_numbers_render_as_zero(headers_only_options, fixed_now) -> None:
    headers_only_options.columns = [Column(key="n", label="Monto", format=ColumnFormat.CURRENCY)]
    headers_only_options.data = [{"n": 10**400}]
    ws = _load(render_spreadsheet(headers_only_options, now=fixed_now)).active
    assert ws.cell(row=5, column=1).value == 0


def test_sheet_title_is_sanitized(headers_only_options, fixed_now) -> None:
    headers_only_options.title = "Inventario: Equipos/Notebooks [2024] completo"
    ws = _load(render_spreadsheet(headers_only_options, now=fixed_now)).active
    assert len(ws.title) <= 31
    assert not set(ws.title) & set("[]:*?/\\")


def test_formula_like_text_is_not_evaluated(headers_only_options, fixed_now) -> None:
    headers_only_options.data = [{"name": "=SUM(A1:A3)"}]
    ws = _load(render_spreadsheet(headers_only_options, now=fixed_now)).active
    cell = ws.cell(row=5, column=1)
    assert cell.value == "=SUM(A1:A3)"
    assert cell.data_type != "f"


def test_control_characters_are_dropped(headers_only_options, fixed_now) -> None:
    headers_only_options.data = [{"name": "linea\x00uno\x07"}]
    ws = _load(render_spreadsheet(headers_only_options, now=fixed_now)).active
    assert ws.cell(row=5, column=1).value == "lineauno"


def test_summary_sheet(sample_options, fixed_now) -> None:
    sample_options.filters = [SummaryItem("Estado", "Activo"), SummaryItem("Marca", "")]
    sample_options.summary = [SummaryItem("Costo total", 1444.5)]
    wb = _load(render_spreadsheet(sample_options, now=fixed_now))

    assert wb.sheetnames[1] == "Resumen"
    rows = [tuple(r) for r in wb["Resumen"].iter_rows(values_only=True)]
    assert rows[0] == ("Concepto", "Valor")
    assert ("FILTROS APLICADOS", None) in rows or ("FILTROS APLICADOS", "") in rows
    assert ("Estado", "Activo") in rows
    assert all(r[0] != "Marca" for r in rows)
    assert ("Costo total", 1444.5) in rows
    assert ("Total de registros", 3) in rows
    assert ("Fecha de exportación", "19/10/2026, 14:30:05") in rows


def test_no_summary_sheet_by_default(sample_options, fixed_now) -> None:
    wb = _load(render_spreadsheet(sample_options, now=fixed_now))
    assert len(wb.sheetnames) == 1


def test_no_columns_fails_without_raising() -> None:
    options = ReportOptions(title="Vacío", filename="vacio", columns=[], data=[{"a": 1}])
    result = render_spreadsheet(options)
    assert result.success is False
    assert result.artifact is None
    assert result.message.startswith("Error al exportar Excel: ")


def test_missing_keys_render_as_defaults(fixed_now) -> None:
    options = ReportOptions(
        title="Faltantes",
        filename="faltantes",
        columns=[
            Column(key="nope", label="Texto"),
            Column(key="nada", label="Monto", format=ColumnFormat.CURRENCY),
        ],
        data=[{"other": 1}],
    )
    ws = _load(render_spreadsheet(options, now=fixed_now)).active
    assert ws.cell(row=5, column=1).value in (None, "")
    assert ws.cell(row=5, column=2).value == 0
