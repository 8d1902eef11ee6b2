"""
Тесты журнала проверок
"""
import pydantic
import pytest
from datetime import datetime, timezone

from registry.audit import AuditLog
from registry.models import VerificationStatus


@pytest.fixture
def audit_log():
    return AuditLog(clock=lambda: datetime(2024, 5, 15, 10, 30, tzinfo=timezone.utc))


def test_append_keeps_order(audit_log):
    first = audit_log.append("CO-MIT-2023-482", VerificationStatus.SUCCESS)
    second = audit_log.append("missing", VerificationStatus.FAILED)

    assert audit_log.list() == [first, second]
    assert len(audit_log) == 2


def test_entry_fields(audit_log):
    entry = audit_log.append("CO-MIT-2023-482", VerificationStatus.SUCCESS, "10.0.0.1")

    assert entry.id.startswith("log-")
    assert entry.timestamp == "2024-05-15T10:30:00+00:00"
    assert entry.ip_address == "10.0.0.1"
    assert entry.to_dict()["status"] == "SUCCESS"


def test_default_ip_address(audit_log):
    assert audit_log.append("x", VerificationStatus.FAILED).ip_address == "192.168.1.1"


def test_ids_are_unique(audit_log):
    ids = {audit_log.append("x", VerificationStatus.FAILED).id for _ in range(100)}

    assert len(ids) == 100


def test_entries_are_immutable(audit_log):
    entry = audit_log.append("x", VerificationStatus.FAILED)

    with pytest.raises(pydantic.ValidationError):
        entry.status = VerificationStatus.SUCCESS


def test_list_returns_copy(audit_log):
    audit_log.append("x", VerificationStatus.FAILED)

    audit_log.list().clear()

    assert len(audit_log) == 1
