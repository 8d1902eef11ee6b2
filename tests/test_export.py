"""
Тесты экспорта сертификата в PDF
"""
import pytest
from datetime import datetime

from registry.exceptions import ExportError
from registry.export import CertificateExporter
from registry.models import CertificateDetails


@pytest.fixture
def exporter():
    return CertificateExporter(dpi=150, margin=20, clock=lambda: datetime(2024, 5, 15, 10, 30))


@pytest.fixture
def details(state):
    return state.get_details(state.store.get_certificate("CO-MIT-2023-482"))


def test_page_size(exporter):
    assert exporter.page_size == (1240, 1754)


def test_fit_by_width(exporter):
    assert exporter.fit((1400, 1000), (1240, 1754)) == (20, 20, 1200, 857)


def test_fit_falls_back_to_height(exporter):
    assert exporter.fit((100, 1000), (1240, 1754)) == (534, 20, 171, 1714)


def test_filename(exporter, details):
    assert exporter.filename(details) == "Certificate-CO-MIT-2023-482.pdf"


def test_render(exporter, details):
    image = exporter.render(details)

    assert image.size == exporter.canvas_size
    assert image.mode == "RGB"


def test_to_pdf(exporter, details):
    content = exporter.to_pdf(details)

    assert content.startswith(b"%PDF")


def test_incomplete_details(exporter, state):
    certificate = state.store.get_certificate("CO-MIT-2023-482")

    with pytest.raises(ExportError):
        exporter.to_pdf(CertificateDetails(certificate=certificate, university=None))
