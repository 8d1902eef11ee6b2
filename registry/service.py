"""
Операции администратора над реестром: добавление, изменение и удаление записей.
"""

import logging
from typing import List

from .exceptions import (
    CertificateNotFoundError, MissingFieldsError, UniversityNotFoundError, UnknownUniversityError
)
from .models import Certificate, CertificateRequest, University, UniversityRequest
from .session import Confirmation, is_confirmed
from .storage import RecordStore
from .validators import DataValidator

logger = logging.getLogger(__name__)


class CrudCoordinator:
    """Сервис изменения реестра от имени администратора."""

    def __init__(self, store: RecordStore):
        self.store = store
        self.validator = DataValidator()

    # Университеты

    def add_university(self, request: UniversityRequest) -> University:
        """
        Добавляет университет.

        Raises:
            MissingFieldsError: Если не заполнены обязательные поля
        """
        self._require_fields(self.validator.validate_university(request))

        university = self.store.add_university(request)
        logger.info(f"Добавлен университет {university.id} ({university.name})")
        return university

    def update_university(self, university_id: str, request: UniversityRequest) -> University:
        """
        Изменяет название и страну университета. ID не меняется.

        Raises:
            MissingFieldsError: Если не заполнены обязательные поля
            UniversityNotFoundError: Если университет не найден
        """
        self._require_fields(self.validator.validate_university(request))

        existing = self.store.get_university(university_id)
        if existing is None:
            raise UniversityNotFoundError(university_id)

        updated = existing.model_copy(update={"name": request.name, "country": request.country})
        self.store.update_university(updated)
        logger.info(f"Изменен университет {university_id}")
        return updated

    def delete_university(self, university_id: str, confirm: Confirmation) -> bool:
        """
        Удаляет университет вместе со всеми его сертификатами.

        Каскадное удаление сертификатов отдельно не подтверждается.

        Args:
            university_id: ID университета
            confirm: Подтверждение удаления

        Returns:
            bool: True если университет удален, False если удаление не подтверждено

        Raises:
            UniversityNotFoundError: Если университет не найден
        """
        if self.store.get_university(university_id) is None:
            raise UniversityNotFoundError(university_id)

        if not is_confirmed(confirm):
            logger.info(f"Удаление университета {university_id} отменено")
            return False

        removed = self.store.delete_university(university_id)
        logger.info(
            f"Удален университет {university_id}, вместе с ним удалено сертификатов: {len(removed)}"
        )
        return True

    # Сертификаты

    def add_certificate(self, request: CertificateRequest) -> Certificate:
        """
        Выпускает сертификат.

        Raises:
            MissingFieldsError: Если не заполнены обязательные поля
            UnknownUniversityError: Если университет не существует
            GenerationError: Если не удалось подобрать свободный ID
        """
        self._require_fields(self.validator.validate_certificate(request))

        if self.store.get_university(request.university_id) is None:
            raise UnknownUniversityError(request.university_id)

        certificate = self.store.add_certificate(request)
        logger.info(f"Выпущен сертификат {certificate.id} для {certificate.student_name}")
        return certificate

    def update_certificate(self, certificate_id: str, request: CertificateRequest) -> Certificate:
        """
        Заменяет редактируемые поля сертификата. ID, дата выдачи и QR-код не меняются.

        Существование нового университета не проверяется.

        Raises:
            MissingFieldsError: Если не заполнены обязательные поля
            CertificateNotFoundError: Если сертификат не найден
        """
        self._require_fields(self.validator.validate_certificate(request))

        existing = self._get_certificate_exact(certificate_id)

        updated = existing.model_copy(update={
            "student_name": request.student_name,
            "university_id": request.university_id,
            "degree": request.degree,
            "major": request.major,
            "graduation_date": request.graduation_date
        })
        self.store.update_certificate(updated)

        if self.store.get_university(updated.university_id) is None:
            logger.warning(
                f"Сертификат {certificate_id} ссылается на несуществующий университет {updated.university_id}"
            )
        logger.info(f"Изменен сертификат {certificate_id}")
        return updated

    def delete_certificate(self, certificate_id: str, confirm: Confirmation) -> bool:
        """
        Удаляет сертификат.

        Returns:
            bool: True если сертификат удален, False если удаление не подтверждено

        Raises:
            CertificateNotFoundError: Если сертификат не найден
        """
        self._get_certificate_exact(certificate_id)

        if not is_confirmed(confirm):
            logger.info(f"Удаление сертификата {certificate_id} отменено")
            return False

        self.store.delete_certificate(certificate_id)
        logger.info(f"Удален сертификат {certificate_id}")
        return True

    def _get_certificate_exact(self, certificate_id: str) -> Certificate:
        # Записи администратора адресуются точным ID из списка, без нормализации
        for certificate in self.store.list_certificates():
            if certificate.id == certificate_id:
                return certificate
        raise CertificateNotFoundError(certificate_id)

    def _require_fields(self, missing: List[str]) -> None:
        if missing:
            logger.warning(f"Не заполнены поля: {', '.join(missing)}")
            raise MissingFieldsError(missing)
