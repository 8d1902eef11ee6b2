"""
Хранилище университетов и сертификатов в памяти процесса.
"""

import logging
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Set

from .generator import CertificateIDGenerator, UniversityIDGenerator, build_qr_code_url
from .models import Certificate, CertificateRequest, University, UniversityRequest

logger = logging.getLogger(__name__)


class RecordStore:
    """Коллекции университетов и сертификатов в порядке добавления."""

    def __init__(
            self,
            qr_code_base_url: str,
            qr_code_size: str = "150x150",
            clock: Callable[[], datetime] = datetime.now,
            universities: Optional[Iterable[University]] = None,
            certificates: Optional[Iterable[Certificate]] = None
    ):
        self.qr_code_base_url = qr_code_base_url
        self.qr_code_size = qr_code_size
        self.clock = clock
        self.certificate_id_generator = CertificateIDGenerator()
        self.university_id_generator = UniversityIDGenerator()
        self._universities: List[University] = list(universities or [])
        self._certificates: List[Certificate] = list(certificates or [])
        # ID, выданные за время жизни процесса, включая удаленные
        self._issued_certificate_ids: Set[str] = {certificate.id for certificate in self._certificates}

    # Университеты

    def list_universities(self) -> List[University]:
        return list(self._universities)

    def get_university(self, university_id: str) -> Optional[University]:
        for university in self._universities:
            if university.id == university_id:
                return university
        return None

    def university_ids(self) -> Set[str]:
        return {university.id for university in self._universities}

    def add_university(self, request: UniversityRequest) -> University:
        """
        Добавляет университет со сгенерированным ID.

        Args:
            request: Данные формы университета

        Returns:
            University: Созданный университет
        """
        university = University(
            id=self.university_id_generator.generate(self.university_ids()),
            name=request.name,
            country=request.country
        )
        self._universities.append(university)
        logger.debug(f"Университет {university.id} добавлен в хранилище")
        return university

    def update_university(self, university: University) -> Optional[University]:
        """
        Заменяет университет с тем же ID.

        Returns:
            Optional[University]: Обновленный университет или None если не найден
        """
        for index, existing in enumerate(self._universities):
            if existing.id == university.id:
                self._universities[index] = university
                return university
        return None

    def delete_university(self, university_id: str) -> Optional[List[Certificate]]:
        """
        Удаляет университет и все сертификаты, ссылающиеся на него.

        Args:
            university_id: ID университета

        Returns:
            Optional[List[Certificate]]: Удаленные вместе с ним сертификаты
            или None, если университет не найден
        """
        if self.get_university(university_id) is None:
            return None

        self._universities = [u for u in self._universities if u.id != university_id]

        removed = [c for c in self._certificates if c.university_id == university_id]
        self._certificates = [c for c in self._certificates if c.university_id != university_id]

        logger.debug(f"Университет {university_id} удален, каскадно удалено сертификатов: {len(removed)}")
        return removed

    # Сертификаты

    def list_certificates(self) -> List[Certificate]:
        return list(self._certificates)

    def get_certificate(self, certificate_id: str) -> Optional[Certificate]:
        """
        Ищет сертификат по ID без учета регистра и крайних пробелов.

        Args:
            certificate_id: Искомый ID

        Returns:
            Optional[Certificate]: Сертификат или None если не найден
        """
        wanted = certificate_id.strip().lower()
        for certificate in self._certificates:
            if certificate.id.lower() == wanted:
                return certificate
        return None

    def add_certificate(self, request: CertificateRequest) -> Certificate:
        """
        Создает сертификат: генерирует ID, дату выдачи и URL QR-кода.

        Args:
            request: Данные формы сертификата

        Returns:
            Certificate: Созданный сертификат
        """
        now = self.clock()
        certificate_id = self.certificate_id_generator.generate(
            request.major, request.university_id, now.date(), self._issued_certificate_ids
        )
        self._issued_certificate_ids.add(certificate_id)

        certificate = Certificate(
            id=certificate_id,
            student_name=request.student_name,
            university_id=request.university_id,
            degree=request.degree,
            major=request.major,
            graduation_date=request.graduation_date,
            issue_date=now.date(),
            qr_code_url=build_qr_code_url(certificate_id, self.qr_code_base_url, self.qr_code_size)
        )
        self._certificates.append(certificate)
        logger.debug(f"Сертификат {certificate_id} добавлен в хранилище")
        return certificate

    def update_certificate(self, certificate: Certificate) -> Optional[Certificate]:
        """
        Заменяет сертификат с тем же ID.

        Returns:
            Optional[Certificate]: Обновленный сертификат или None если не найден
        """
        for index, existing in enumerate(self._certificates):
            if existing.id == certificate.id:
                self._certificates[index] = certificate
                return certificate
        return None

    def delete_certificate(self, certificate_id: str) -> bool:
        """
        Удаляет сертификат.

        Returns:
            bool: True если сертификат был удален
        """
        remaining = [c for c in self._certificates if c.id != certificate_id]
        deleted = len(remaining) != len(self._certificates)
        self._certificates = remaining
        return deleted
