"""
Состояние приложения: хранилище, журнал, сессия и работающие с ними сервисы.
"""

import logging
from datetime import datetime
from typing import Dict, Optional

from config.settings import Settings, get_settings
from .audit import AuditLog
from .models import Certificate, CertificateDetails
from .seed import demo_certificates, demo_universities
from .service import CrudCoordinator
from .session import AdminSessionGuard, Authenticator, StaticCredentialAuthenticator
from .storage import RecordStore
from .verification import DelayStrategy, VerificationEngine, fixed_delay

logger = logging.getLogger(__name__)


class ApplicationState:
    """
    Единый владелец данных процесса.

    Все сервисы получают ссылки на одни и те же хранилище и журнал.
    """

    def __init__(self, store: RecordStore, audit_log: AuditLog, guard: AdminSessionGuard,
                 delay: Optional[DelayStrategy] = None):
        self.store = store
        self.audit_log = audit_log
        self.guard = guard
        self.verification = VerificationEngine(store, audit_log, delay)
        self.coordinator = CrudCoordinator(store)

    def get_details(self, certificate: Certificate) -> CertificateDetails:
        """Сертификат вместе с выдавшим его университетом."""
        return CertificateDetails(
            certificate=certificate,
            university=self.store.get_university(certificate.university_id)
        )

    def get_statistics(self) -> Dict:
        """
        Статистика для панели администратора.

        Returns:
            Dict: Количество сертификатов, университетов и проверок
        """
        return {
            "total_certificates": len(self.store.list_certificates()),
            "total_universities": len(self.store.list_universities()),
            "total_verifications": len(self.audit_log),
            "last_updated": datetime.now().isoformat()
        }


def create_application_state(settings: Optional[Settings] = None,
                             authenticator: Optional[Authenticator] = None,
                             delay: Optional[DelayStrategy] = None,
                             seed: Optional[bool] = None) -> ApplicationState:
    """
    Создает состояние приложения по настройкам.

    Args:
        settings: Настройки (по умолчанию глобальные)
        authenticator: Проверка учетных данных (по умолчанию фиксированная пара из настроек)
        delay: Стратегия задержки поиска (по умолчанию settings.lookup_delay)
        seed: Загрузить демонстрационные данные (по умолчанию settings.seed_demo_data)

    Returns:
        ApplicationState: Новое состояние
    """
    settings = settings or get_settings()
    seed = settings.seed_demo_data if seed is None else seed

    universities = demo_universities() if seed else []
    certificates = demo_certificates(settings.qr_code_base_url, settings.qr_code_size) if seed else []

    store = RecordStore(
        qr_code_base_url=settings.qr_code_base_url,
        qr_code_size=settings.qr_code_size,
        universities=universities,
        certificates=certificates
    )
    audit_log = AuditLog(default_ip_address=settings.default_ip_address)
    guard = AdminSessionGuard(
        authenticator or StaticCredentialAuthenticator(settings.admin_username, settings.admin_password)
    )

    logger.info(
        f"Состояние приложения создано: университетов {len(universities)}, сертификатов {len(certificates)}"
    )
    return ApplicationState(store, audit_log, guard, delay or fixed_delay(settings.lookup_delay))
