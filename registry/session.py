"""
Сессия администратора и проверка учетных данных.
"""

import logging
import secrets
from typing import Callable, Optional, Union

from .exceptions import InvalidCredentialsError, NotAuthenticatedError
from .models import AdminSession

logger = logging.getLogger(__name__)

# Подтверждение разрушительного действия: флаг или функция, спрашивающая пользователя
Confirmation = Union[bool, Callable[[], bool]]


def is_confirmed(confirm: Confirmation) -> bool:
    """Вычисляет подтверждение, переданное флагом или функцией."""
    return bool(confirm()) if callable(confirm) else bool(confirm)


class Authenticator:
    """Интерфейс проверки учетных данных администратора."""

    def authenticate(self, username: str, password: str) -> bool:
        raise NotImplementedError


class StaticCredentialAuthenticator(Authenticator):
    """Проверка по единственной фиксированной паре логин/пароль."""

    def __init__(self, username: str, password: str):
        self.username = username
        self.password = password

    def authenticate(self, username: str, password: str) -> bool:
        # Оба сравнения выполняются всегда
        username_ok = secrets.compare_digest(username.encode(), self.username.encode())
        password_ok = secrets.compare_digest(password.encode(), self.password.encode())
        return username_ok and password_ok


class AdminSessionGuard:
    """
    Конечный автомат сессии администратора: LoggedOut -> LoggedIn(username) -> LoggedOut.

    Guard не блокирует операции сам: хост (веб-приложение, CLI) вызывает
    require_admin() перед обращением к CrudCoordinator.
    """

    def __init__(self, authenticator: Authenticator):
        self.authenticator = authenticator
        self._username: Optional[str] = None

    @property
    def is_logged_in(self) -> bool:
        return self._username is not None

    @property
    def username(self) -> Optional[str]:
        return self._username

    @property
    def session(self) -> AdminSession:
        return AdminSession(is_logged_in=self.is_logged_in, username=self._username)

    def login(self, username: str, password: str) -> AdminSession:
        """
        Вход администратора.

        Args:
            username: Имя пользователя
            password: Пароль

        Returns:
            AdminSession: Новое состояние сессии

        Raises:
            InvalidCredentialsError: Если пара не принята, состояние не меняется
        """
        if not self.authenticator.authenticate(username or "", password or ""):
            logger.warning(f"Отклонена попытка входа пользователя {username!r}")
            raise InvalidCredentialsError("Неверное имя пользователя или пароль")

        self._username = username
        logger.info(f"Администратор {username} вошел в систему")
        return self.session

    def logout(self, confirm: Confirmation) -> bool:
        """
        Выход администратора после явного подтверждения.

        Args:
            confirm: Подтверждение выхода

        Returns:
            bool: True если сессия была завершена
        """
        if not self.is_logged_in:
            return False

        if not is_confirmed(confirm):
            logger.info(f"Выход администратора {self._username} отменен")
            return False

        logger.info(f"Администратор {self._username} вышел из системы")
        self._username = None
        return True

    def require_admin(self) -> str:
        """
        Проверяет, что администратор вошел в систему.

        Returns:
            str: Имя администратора

        Raises:
            NotAuthenticatedError: Если вход не выполнен
        """
        if not self.is_logged_in:
            raise NotAuthenticatedError("Требуется вход администратора")
        return self._username
