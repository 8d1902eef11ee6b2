"""
Pydantic модели для валидации и сериализации данных реестра сертификатов.
"""

from datetime import date
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, validator


class VerificationStatus(str, Enum):
    """Результат попытки проверки сертификата."""
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class Language(str, Enum):
    """Поддерживаемые языки интерфейса."""
    EN = "en"
    AR = "ar"

    @property
    def direction(self) -> str:
        """Направление текста для языка."""
        return "rtl" if self is Language.AR else "ltr"


def _strip_text(v):
    """Приводит значение поля формы к обрезанной строке."""
    if v is None:
        return ""
    return str(v).strip()


class UniversityRequest(BaseModel):
    """Модель формы добавления/редактирования университета."""
    name: str = Field(default="", description="Название университета")
    country: str = Field(default="", description="Страна")

    @validator('name', 'country', pre=True)
    def strip_text(cls, v):
        return _strip_text(v)

    class Config:
        """Конфигурация модели."""
        json_schema_extra = {
            "example": {
                "name": "Test University",
                "country": "Testland"
            }
        }


class University(BaseModel):
    """Модель университета."""
    id: str = Field(..., description="ID университета")
    name: str = Field(..., description="Название университета")
    country: str = Field(..., description="Страна")

    def to_dict(self) -> dict:
        """Конвертирует объект в словарь для JSON сериализации."""
        return {
            "id": self.id,
            "name": self.name,
            "country": self.country
        }

    class Config:
        """Конфигурация модели."""
        frozen = True


class CertificateRequest(BaseModel):
    """Модель формы добавления/редактирования сертификата."""
    student_name: str = Field(default="", description="ФИО выпускника")
    university_id: str = Field(default="", description="ID университета")
    degree: str = Field(default="", description="Степень")
    major: str = Field(default="", description="Специальность")
    graduation_date: Optional[date] = Field(default=None, description="Дата выпуска")

    @validator('student_name', 'university_id', 'degree', 'major', pre=True)
    def strip_text(cls, v):
        return _strip_text(v)

    @validator('graduation_date', pre=True)
    def empty_date_is_missing(cls, v):
        """Пустое значение даты из формы считается незаполненным полем."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    class Config:
        """Конфигурация модели."""
        json_schema_extra = {
            "example": {
                "student_name": "Jane Doe",
                "university_id": "mit",
                "degree": "Bachelor of Science",
                "major": "Computer Science",
                "graduation_date": "2024-06-01"
            }
        }


class Certificate(BaseModel):
    """Модель сертификата об образовании."""
    id: str = Field(..., description="ID сертификата")
    student_name: str = Field(..., description="ФИО выпускника")
    university_id: str = Field(..., description="ID университета")
    degree: str = Field(..., description="Степень")
    major: str = Field(..., description="Специальность")
    graduation_date: date = Field(..., description="Дата выпуска")
    issue_date: date = Field(..., description="Дата выдачи")
    qr_code_url: str = Field(..., description="URL изображения QR-кода")

    def to_dict(self) -> dict:
        """Конвертирует объект в словарь для JSON сериализации."""
        return {
            "id": self.id,
            "student_name": self.student_name,
            "university_id": self.university_id,
            "degree": self.degree,
            "major": self.major,
            "graduation_date": self.graduation_date.isoformat(),
            "issue_date": self.issue_date.isoformat(),
            "qr_code_url": self.qr_code_url
        }

    class Config:
        """Конфигурация модели."""
        frozen = True
        json_schema_extra = {
            "example": {
                "id": "CO-MIT-2024-417",
                "student_name": "Jane Doe",
                "university_id": "mit",
                "degree": "Bachelor of Science",
                "major": "Computer Science",
                "graduation_date": "2024-06-01",
                "issue_date": "2024-06-15",
                "qr_code_url": "https://api.qrserver.com/v1/create-qr-code/?size=150x150&data=CO-MIT-2024-417"
            }
        }


class VerificationLog(BaseModel):
    """Запись журнала проверок. Неизменяема после создания."""
    id: str = Field(..., description="ID записи")
    certificate_id: str = Field(..., description="Проверяемый ID сертификата")
    timestamp: str = Field(..., description="Время проверки (ISO-8601)")
    status: VerificationStatus = Field(..., description="Результат проверки")
    ip_address: str = Field(..., description="IP адрес клиента")

    def to_dict(self) -> dict:
        """Конвертирует объект в словарь для JSON сериализации."""
        return {
            "id": self.id,
            "certificate_id": self.certificate_id,
            "timestamp": self.timestamp,
            "status": self.status.value,
            "ip_address": self.ip_address
        }

    class Config:
        """Конфигурация модели."""
        frozen = True


class AdminSession(BaseModel):
    """Состояние сессии администратора."""
    is_logged_in: bool = Field(default=False, description="Выполнен ли вход")
    username: Optional[str] = Field(default=None, description="Имя администратора")


class CertificateDetails(BaseModel):
    """Сертификат вместе с выдавшим его университетом."""
    certificate: Certificate
    university: Optional[University] = None

    @property
    def university_name(self) -> str:
        """Название университета или 'Unknown', если он удален."""
        return self.university.name if self.university else "Unknown"

    @property
    def is_complete(self) -> bool:
        """Можно ли отобразить сертификат целиком."""
        return self.university is not None

    def to_dict(self, language: Language = Language.EN) -> dict:
        """Конвертирует объект в словарь для JSON сериализации."""
        return {
            "certificate": self.certificate.to_dict(),
            "university": self.university.to_dict() if self.university else None,
            "university_name": self.university_name,
            "language": language.value,
            "dir": language.direction
        }


class VerificationResult(BaseModel):
    """Результат завершенной проверки сертификата."""
    query: str = Field(..., description="Проверяемое значение после обрезки пробелов")
    certificate: Optional[Certificate] = None
    log: VerificationLog

    @property
    def found(self) -> bool:
        """Найден ли сертификат."""
        return self.certificate is not None

    @property
    def status(self) -> VerificationStatus:
        return self.log.status
