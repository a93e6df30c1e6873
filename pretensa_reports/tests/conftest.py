"""Pytest configuration and fixtures."""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

import pytest

# Ensure project root is on path when running tests
_project_root = Path(__file__).resolve().parents[2]
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from pretensa_reports.models import (
    Branding,
    Column,
    ColumnFormat,
    CompanyInfo,
    ReportMetadata,
    ReportOptions,
)


@pytest.fixture
def fixed_now():
    """Deterministic generation timestamp."""
    return datetime(2026, 10, 19, 14, 30, 5)


@pytest.fixture
def sample_records():
    """A few inventory-like records with mixed value types."""
    return [
        {
            "name": "Notebook Lenovo T14",
            "quantity": 12,
            "unitCost": 1234.5,
            "purchaseDate": "2024-03-05T00:00:00Z",
            "discount": 0.125,
        },
        {
            "name": "Monitor Samsung 24 pulgadas",
            "quantity": 3,
            "unitCost": 210,
            "purchaseDate": "2023-11-20",
            "discount": 0,
        },
        {
            "name": "Cable HDMI",
            "quantity": None,
            "unitCost": "n/a",
            "purchaseDate": "sin fecha",
            "discount": None,
        },
    ]


@pytest.fixture
def sample_columns():
    return [
        Column(key="name", label="Nombre"),
        Column(key="quantity", label="Cantidad", format=ColumnFormat.NUMBER),
        Column(key="unitCost", label="Costo unitario", format=ColumnFormat.CURRENCY),
        Column(key="purchaseDate", label="Fecha de compra", format=ColumnFormat.DATE),
        Column(key="discount", label="Descuento", format=ColumnFormat.PERCENTAGE),
    ]


@pytest.fixture
def sample_options(sample_records, sample_columns):
    """Fully branded options over the sample records."""
    return ReportOptions(
        title="Inventario de Equipos",
        subtitle="Depósito central",
        filename="inventario_de_equipos_2026-10-19",
        columns=sample_columns,
        data=sample_records,
        company_info=CompanyInfo(
            name="Estructuras Pretensa",
            address="Avenida La Voz del Interior 5500, Córdoba, Argentina",
            email="sistemas@pretensa.com.ar",
        ),
        metadata=ReportMetadata(
            author="Mesa de Ayuda",
            department="Sistemas",
            keywords=["inventario", "equipos"],
        ),
        branding=Branding(primary_color="#1E5AA8", header_color="#E5E7EB"),
    )


@pytest.fixture
def headers_only_options():
    """No records, one text column, no branding."""
    return ReportOptions(
        title="Reporte",
        filename="reporte",
        columns=[Column(key="name", label="Name", format=ColumnFormat.TEXT)],
        data=[],
    )
