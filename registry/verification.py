"""
Проверка сертификатов по ID или по тексту, считанному из QR-кода.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Hashable, Optional, Set

from .audit import AuditLog
from .exceptions import RequiredFieldError, VerificationInProgressError
from .models import VerificationResult, VerificationStatus
from .storage import RecordStore

logger = logging.getLogger(__name__)

# Стратегия искусственной задержки перед поиском
DelayStrategy = Callable[[], Awaitable[None]]

# Отправитель по умолчанию (CLI, сканер): один интерфейс на процесс
DEFAULT_SUBMITTER = "local"


def fixed_delay(seconds: float) -> DelayStrategy:
    """Задержка фиксированной длительности (имитация сетевого запроса)."""
    async def delay() -> None:
        if seconds > 0:
            await asyncio.sleep(seconds)
    return delay


class VerificationEngine:
    """Сервис проверки сертификатов."""

    def __init__(self, store: RecordStore, audit_log: AuditLog,
                 delay: Optional[DelayStrategy] = None):
        self.store = store
        self.audit_log = audit_log
        self.delay = delay or fixed_delay(0)
        self._in_flight: Set[Hashable] = set()

    @property
    def is_busy(self) -> bool:
        """Выполняется ли сейчас хотя бы одна проверка."""
        return bool(self._in_flight)

    def is_submitting(self, submitter: Hashable = DEFAULT_SUBMITTER) -> bool:
        """Ожидает ли отправитель результата своей проверки."""
        return submitter in self._in_flight

    def lookup(self, candidate: str, ip_address: str = None) -> VerificationResult:
        """
        Проверяет сертификат без задержки.

        Args:
            candidate: ID, введенный вручную или считанный из QR-кода
            ip_address: Адрес клиента

        Returns:
            VerificationResult: Результат проверки, запись журнала уже добавлена

        Raises:
            RequiredFieldError: Если ID пустой (запись в журнал не добавляется)
        """
        query = self._require_candidate(candidate)
        return self._resolve(query, ip_address)

    async def verify(self, candidate: str, ip_address: str = None,
                     submitter: Hashable = DEFAULT_SUBMITTER) -> VerificationResult:
        """
        Проверяет сертификат с имитацией задержки поиска.

        Пока проверка ожидает, тот же отправитель не может отправить новую.
        Проверки разных отправителей не блокируют друг друга.

        Args:
            candidate: ID, введенный вручную или считанный из QR-кода
            ip_address: Адрес клиента
            submitter: Ключ отправителя (форма, сессия клиента)

        Raises:
            RequiredFieldError: Если ID пустой
            VerificationInProgressError: Если предыдущая проверка отправителя еще не завершена
        """
        query = self._require_candidate(candidate)

        if submitter in self._in_flight:
            raise VerificationInProgressError("Проверка уже выполняется")

        self._in_flight.add(submitter)
        try:
            await self.delay()
            return self._resolve(query, ip_address)
        finally:
            self._in_flight.discard(submitter)

    def _require_candidate(self, candidate: Optional[str]) -> str:
        query = (candidate or "").strip()
        if not query:
            raise RequiredFieldError("certificate_id")
        return query

    def _resolve(self, query: str, ip_address: Optional[str]) -> VerificationResult:
        certificate = self.store.get_certificate(query)

        if certificate is None:
            entry = self.audit_log.append(query, VerificationStatus.FAILED, ip_address)
            logger.warning(f"Сертификат {query} не найден")
            return VerificationResult(query=query, certificate=None, log=entry)

        entry = self.audit_log.append(certificate.id, VerificationStatus.SUCCESS, ip_address)
        logger.info(f"Сертификат {certificate.id} успешно проверен")
        return VerificationResult(query=query, certificate=certificate, log=entry)
