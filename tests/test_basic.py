"""
Базовые тесты хранилища и сквозной сценарий работы системы.
"""

import pydantic
import re
import pytest
from datetime import date, datetime
from unittest.mock import patch

from registry.models import CertificateRequest, University, UniversityRequest, VerificationStatus
from registry.seed import demo_certificates
from registry.storage import RecordStore

QR_BASE_URL = "https://api.qrserver.com/v1/create-qr-code/"


class TestRecordStore:
    """Тесты хранилища в памяти."""

    def test_add_certificate(self, store_2024, certificate_request):
        """Тест выпуска сертификата."""
        certificate = store_2024.add_certificate(certificate_request)

        assert re.fullmatch(r"CO-MIT-2024-\d{3}", certificate.id)
        assert certificate.issue_date == date(2024, 5, 15)
        assert certificate.id in certificate.qr_code_url
        assert certificate.qr_code_url.endswith(f"data={certificate.id}")
        assert store_2024.list_certificates() == [certificate]

    def test_generated_ids_are_unique(self, store_2024, certificate_request):
        """Тест уникальности ID сертификатов."""
        ids = [store_2024.add_certificate(certificate_request).id for _ in range(50)]

        assert len(set(ids)) == 50

    def test_deleted_id_is_not_reissued(self, store_2024, certificate_request):
        """ID удаленного сертификата не выдается повторно."""
        with patch("registry.generator.random.randint", side_effect=[500, 500, 501]):
            first = store_2024.add_certificate(certificate_request)
            store_2024.delete_certificate(first.id)
            second = store_2024.add_certificate(certificate_request)

        assert first.id == "CO-MIT-2024-500"
        assert second.id == "CO-MIT-2024-501"

    def test_seeded_id_is_not_reissued(self, certificate_request):
        store = RecordStore(QR_BASE_URL, clock=lambda: datetime(2023, 5, 1),
                            certificates=demo_certificates(QR_BASE_URL))
        store.delete_certificate("CO-MIT-2023-482")

        with patch("registry.generator.random.randint", side_effect=[482, 483]):
            certificate = store.add_certificate(certificate_request)

        assert certificate.id == "CO-MIT-2023-483"

    def test_get_certificate_ignores_case_and_whitespace(self, state):
        """Тест поиска сертификата без учета регистра и пробелов."""
        certificate = state.store.get_certificate("  co-mit-2023-482\t")

        assert certificate is not None
        assert certificate.id == "CO-MIT-2023-482"

    def test_get_certificate_requires_exact_match(self, state):
        assert state.store.get_certificate("CO-MIT-2023") is None

    def test_lists_keep_insertion_order(self, store_2024):
        """Тест порядка добавления."""
        first = store_2024.add_university(UniversityRequest(name="First", country="A"))
        second = store_2024.add_university(UniversityRequest(name="Second", country="B"))

        assert [u.id for u in store_2024.list_universities()] == [first.id, second.id]

    def test_list_returns_copy(self, state):
        universities = state.store.list_universities()
        universities.clear()

        assert len(state.store.list_universities()) == 5

    def test_update_university(self, state):
        updated = state.store.update_university(University(id="mit", name="MIT", country="USA"))

        assert updated.name == "MIT"
        assert state.store.get_university("mit").name == "MIT"

    def test_update_missing_university(self, state):
        assert state.store.update_university(University(id="nope", name="X", country="Y")) is None

    def test_delete_university_cascades(self, state, certificate_request):
        """Удаление университета удаляет только его сертификаты."""
        added = state.store.add_certificate(certificate_request)
        others = [c for c in state.store.list_certificates() if c.university_id != "mit"]

        removed = state.store.delete_university("mit")

        assert {c.id for c in removed} == {"CO-MIT-2023-482", added.id}
        assert state.store.get_university("mit") is None
        assert state.store.list_certificates() == others

    def test_delete_missing_university(self, state):
        assert state.store.delete_university("nope") is None
        assert len(state.store.list_universities()) == 5

    def test_stored_records_are_immutable(self, state):
        """Записи из хранилища нельзя изменить на месте."""
        certificate = state.store.get_certificate("CO-MIT-2023-482")
        university = state.store.get_university("mit")

        with pytest.raises(pydantic.ValidationError):
            certificate.id = "X"
        with pytest.raises(pydantic.ValidationError):
            university.name = "X"

        assert state.store.get_certificate("CO-MIT-2023-482").id == "CO-MIT-2023-482"
        assert state.store.get_university("mit").name == "Massachusetts Institute of Technology"

    def test_delete_certificate(self, state):
        assert state.store.delete_certificate("CO-MIT-2023-482") is True
        assert state.store.get_certificate("CO-MIT-2023-482") is None
        assert state.store.delete_certificate("CO-MIT-2023-482") is False


class TestScenario:
    """Сквозной сценарий: университет, сертификат, проверки, каскадное удаление."""

    def test_full_scenario(self, state):
        coordinator = state.coordinator
        engine = state.verification
        universities_before = len(state.store.list_universities())

        university = coordinator.add_university(UniversityRequest(name="Test University", country="Testland"))
        assert len(state.store.list_universities()) == universities_before + 1
        assert university.id not in {"mit", "stanford", "oxford", "ksu", "cairo"}

        certificate = coordinator.add_certificate(CertificateRequest(
            student_name="Test Student",
            university_id=university.id,
            degree="Bachelor of Arts",
            major="History",
            graduation_date=date(2024, 6, 1)
        ))
        assert certificate.id in certificate.qr_code_url
        assert state.store.get_certificate(certificate.id) == certificate

        result = engine.lookup(certificate.id)
        assert result.certificate == certificate
        assert result.status is VerificationStatus.SUCCESS

        result = engine.lookup("nonexistent-id")
        assert result.certificate is None
        assert result.log.status is VerificationStatus.FAILED
        assert result.log.certificate_id == "nonexistent-id"

        assert coordinator.delete_university(university.id, confirm=True) is True
        assert state.store.get_university(university.id) is None
        assert state.store.get_certificate(certificate.id) is None

        logs = state.audit_log.list()
        assert [entry.status for entry in logs] == [VerificationStatus.SUCCESS, VerificationStatus.FAILED]
        assert logs[0].certificate_id == certificate.id
