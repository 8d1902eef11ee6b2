"""
Общие фикстуры для тестов
"""
import pytest
from datetime import date, datetime

from config.settings import Settings
from registry.models import CertificateRequest, UniversityRequest
from registry.state import create_application_state
from registry.storage import RecordStore
from registry.verification import fixed_delay

QR_BASE_URL = "https://api.qrserver.com/v1/create-qr-code/"


@pytest.fixture
def settings(tmp_path):
    """Настройки без задержки поиска"""
    return Settings(
        lookup_delay=0,
        seed_demo_data=True,
        log_file=tmp_path / "logs" / "verifier.log"
    )


@pytest.fixture
def state(settings):
    """Состояние с демонстрационными данными"""
    return create_application_state(settings, delay=fixed_delay(0))


@pytest.fixture
def empty_state(settings):
    """Состояние без данных"""
    return create_application_state(settings, delay=fixed_delay(0), seed=False)


@pytest.fixture
def store_2024():
    """Пустое хранилище, в котором сейчас май 2024 года"""
    return RecordStore(QR_BASE_URL, clock=lambda: datetime(2024, 5, 15, 10, 30))


@pytest.fixture
def university_request():
    """Образец формы университета"""
    return UniversityRequest(name="Test University", country="Testland")


@pytest.fixture
def certificate_request():
    """Образец формы сертификата для MIT"""
    return CertificateRequest(
        student_name="Jane Doe",
        university_id="mit",
        degree="Bachelor of Science",
        major="Computer Science",
        graduation_date=date(2024, 6, 1)
    )
