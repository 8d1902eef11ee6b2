"""
Генераторы идентификаторов сертификатов и университетов.
"""

import random
import re
import time
from datetime import date
from typing import Callable, Iterable, Optional, Set
from urllib.parse import urlencode
from .exceptions import GenerationError


class CertificateIDGenerator:
    """Генератор уникальных ID сертификатов."""

    def __init__(self):
        # Последний блок ID - трехзначное случайное число
        self.min_number = 100
        self.max_number = 999
        self.max_attempts = 1000  # Максимальное количество попыток генерации уникального ID
        self.id_pattern = re.compile(r'^(?P<major>[^-]{1,2})-(?P<university>.+)-(?P<year>\d{4})-(?P<number>\d{3})$')

    def generate(self, major: str, university_id: str, created_on: date,
                 existing_ids: Optional[Iterable[str]] = None) -> str:
        """
        Генерирует уникальный ID сертификата.

        Формат: {MA}-{UNIVERSITY}-{YYYY}-{NNN}
        MA - первые две буквы специальности, UNIVERSITY - ID университета
        в верхнем регистре, YYYY - год создания, NNN - число от 100 до 999.

        Args:
            major: Специальность
            university_id: ID университета
            created_on: Дата создания сертификата
            existing_ids: Существующие ID для проверки уникальности

        Returns:
            str: Уникальный ID сертификата

        Raises:
            GenerationError: Если не удалось сгенерировать уникальный ID
        """
        # Уникальность без учета регистра
        taken = {existing.upper() for existing in (existing_ids or ())}
        prefix = self._format_prefix(major, university_id, created_on)

        for attempt in range(self.max_attempts):
            certificate_id = f"{prefix}-{random.randint(self.min_number, self.max_number)}"

            if certificate_id.upper() not in taken:
                return certificate_id

        raise GenerationError(
            f"Не удалось сгенерировать уникальный ID сертификата с префиксом {prefix} "
            f"за {self.max_attempts} попыток"
        )

    def _format_prefix(self, major: str, university_id: str, created_on: date) -> str:
        """
        Формирует неслучайную часть ID.

        Args:
            major: Специальность
            university_id: ID университета
            created_on: Дата создания

        Returns:
            str: Строка формата MA-UNIVERSITY-YYYY
        """
        return f"{major[:2].upper()}-{university_id.upper()}-{created_on.year:04d}"

    def validate_id_format(self, certificate_id: str) -> bool:
        """
        Проверяет, похож ли ID на сгенерированный системой.

        Args:
            certificate_id: ID для проверки

        Returns:
            bool: True если формат корректен, False иначе
        """
        if not certificate_id:
            return False

        match = self.id_pattern.match(certificate_id.strip())
        if not match:
            return False

        return self.min_number <= int(match.group('number')) <= self.max_number


class UniversityIDGenerator:
    """Генератор ID университетов на основе времени создания."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self.clock = clock
        self._last_token = 0

    def generate(self, existing_ids: Optional[Set[str]] = None) -> str:
        """
        Генерирует ID вида u<миллисекунды>, уникальный на время жизни процесса.

        Args:
            existing_ids: Существующие ID университетов

        Returns:
            str: Новый ID университета
        """
        existing_ids = existing_ids or set()

        # Метка строго возрастает, даже если часы не сдвинулись между вызовами
        token = max(int(self.clock() * 1000), self._last_token + 1)
        while f"u{token}" in existing_ids:
            token += 1

        self._last_token = token
        return f"u{token}"


def build_qr_code_url(certificate_id: str, base_url: str, size: str = "150x150") -> str:
    """
    Формирует URL изображения QR-кода, кодирующего ID сертификата.

    Args:
        certificate_id: ID сертификата
        base_url: Адрес сервиса генерации QR-кодов
        size: Размер изображения (NxN)

    Returns:
        str: URL изображения
    """
    return f"{base_url}?{urlencode({'size': size, 'data': certificate_id})}"
