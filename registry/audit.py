"""
Журнал попыток проверки сертификатов.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, List

from .models import VerificationLog, VerificationStatus

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AuditLog:
    """Журнал только на добавление. Записи не изменяются и не удаляются."""

    def __init__(self, default_ip_address: str = "192.168.1.1",
                 clock: Callable[[], datetime] = _utc_now):
        self.default_ip_address = default_ip_address
        self.clock = clock
        self._entries: List[VerificationLog] = []

    def append(self, certificate_id: str, status: VerificationStatus,
               ip_address: str = None) -> VerificationLog:
        """
        Добавляет запись о попытке проверки в конец журнала.

        Args:
            certificate_id: Проверяемый ID (канонический при успехе, введенный при неудаче)
            status: Результат проверки
            ip_address: Адрес клиента, если известен

        Returns:
            VerificationLog: Созданная запись
        """
        entry = VerificationLog(
            id=f"log-{uuid.uuid4().hex}",
            certificate_id=certificate_id,
            timestamp=self.clock().isoformat(),
            status=status,
            ip_address=ip_address or self.default_ip_address
        )
        self._entries.append(entry)
        logger.debug(f"Запись {entry.id} добавлена в журнал проверок ({status.value})")
        return entry

    def list(self) -> List[VerificationLog]:
        """Записи в порядке добавления."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
