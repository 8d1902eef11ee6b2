"""
Модуль валидации входных данных форм администратора.
"""

from typing import Dict, List
from .models import CertificateRequest, UniversityRequest


class RequiredFieldsValidator:
    """Валидатор обязательных полей."""

    def missing(self, values: Dict[str, object]) -> List[str]:
        """
        Возвращает имена незаполненных полей.

        Args:
            values: Значения полей формы

        Returns:
            List[str]: Незаполненные поля в порядке следования формы
        """
        missing = []
        for name, value in values.items():
            if value is None:
                missing.append(name)
            elif isinstance(value, str) and not value.strip():
                missing.append(name)
        return missing


class DataValidator:
    """Общий валидатор для форм университета и сертификата."""

    university_fields = ("name", "country")
    certificate_fields = ("student_name", "university_id", "degree", "major", "graduation_date")

    def __init__(self):
        self.required_fields_validator = RequiredFieldsValidator()

    def validate_university(self, request: UniversityRequest) -> List[str]:
        """
        Валидация формы университета.

        Returns:
            List[str]: Список незаполненных полей (пустой если все в порядке)
        """
        values = {name: getattr(request, name) for name in self.university_fields}
        return self.required_fields_validator.missing(values)

    def validate_certificate(self, request: CertificateRequest) -> List[str]:
        """
        Валидация формы сертификата.

        Returns:
            List[str]: Список незаполненных полей (пустой если все в порядке)
        """
        values = {name: getattr(request, name) for name in self.certificate_fields}
        return self.required_fields_validator.missing(values)
