"""
Кастомные исключения для системы проверки сертификатов.
"""

from typing import Iterable


class VerifierError(Exception):
    """Базовое исключение для всех ошибок системы."""
    pass


class ValidationError(VerifierError):
    """Ошибка валидации входных данных."""
    pass


class RequiredFieldError(ValidationError):
    """Не заполнено обязательное поле (например, ID сертификата при проверке)."""

    def __init__(self, field: str = "certificate_id"):
        self.field = field
        super().__init__(f"Поле обязательно для заполнения: {field}")


class MissingFieldsError(ValidationError):
    """Не заполнены обязательные поля формы."""

    def __init__(self, fields: Iterable[str]):
        self.fields = list(fields)
        super().__init__(f"Заполните все поля: {', '.join(self.fields)}")


class UnknownUniversityError(ValidationError):
    """Сертификат ссылается на несуществующий университет."""

    def __init__(self, university_id: str):
        self.university_id = university_id
        super().__init__(f"Университет не найден: {university_id}")


class NotFoundError(VerifierError):
    """Запись не найдена."""
    pass


class CertificateNotFoundError(NotFoundError):
    """Сертификат не найден."""

    def __init__(self, certificate_id: str):
        self.certificate_id = certificate_id
        super().__init__(f"Сертификат не найден: {certificate_id}")


class UniversityNotFoundError(NotFoundError):
    """Университет не найден."""

    def __init__(self, university_id: str):
        self.university_id = university_id
        super().__init__(f"Университет не найден: {university_id}")


class AuthError(VerifierError):
    """Ошибка авторизации администратора."""
    pass


class InvalidCredentialsError(AuthError):
    """Неверные имя пользователя или пароль."""
    pass


class NotAuthenticatedError(AuthError):
    """Операция доступна только вошедшему администратору."""
    pass


class ExternalToolError(VerifierError):
    """Ошибка внешнего инструмента (сканер QR, экспорт PDF)."""
    pass


class ScanError(ExternalToolError):
    """Не удалось распознать QR-код."""
    pass


class ExportError(ExternalToolError):
    """Не удалось сформировать PDF документ."""
    pass


class GenerationError(VerifierError):
    """Ошибка генерации идентификатора."""
    pass


class VerificationInProgressError(VerifierError):
    """Проверка уже выполняется, повторная отправка запрещена."""
    pass
