"""
Настройки приложения, загружаемые из переменных окружения.
"""

import re
from pathlib import Path
from pydantic import Field, validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Настройки приложения."""

    # Учетные данные администратора
    admin_username: str = Field(default="admin", description="Имя администратора")
    admin_password: str = Field(default="password", description="Пароль администратора")

    # Настройки проверки
    lookup_delay: float = Field(default=1.5, description="Имитация задержки поиска, секунды")
    default_ip_address: str = Field(default="192.168.1.1", description="IP для журнала, если клиент неизвестен")
    seed_demo_data: bool = Field(default=True, description="Загружать демонстрационные данные")

    # Настройки QR-кодов
    qr_code_base_url: str = Field(
        default="https://api.qrserver.com/v1/create-qr-code/",
        description="Адрес сервиса изображений QR-кодов"
    )
    qr_code_size: str = Field(default="150x150", description="Размер изображения QR-кода")

    # Настройки интерфейса
    default_language: str = Field(default="en", description="Язык по умолчанию (en или ar)")

    # Настройки логирования
    log_level: str = Field(default="INFO", description="Уровень логирования")
    log_file: Path = Field(default=Path("./logs/verifier.log"), description="Путь к файлу логов")

    # Настройки веб-приложения
    api_host: str = Field(default="127.0.0.1", description="Адрес веб-приложения")
    api_port: int = Field(default=8000, description="Порт веб-приложения")
    debug: bool = Field(default=False, description="Режим отладки")

    @validator('lookup_delay')
    def validate_lookup_delay(cls, v):
        """Задержка не может быть отрицательной."""
        if v < 0:
            raise ValueError("Задержка поиска не может быть отрицательной")
        return v

    @validator('qr_code_size')
    def validate_qr_code_size(cls, v):
        """Размер задается в формате NxN."""
        if not re.match(r'^\d+x\d+$', v):
            raise ValueError(f"Некорректный размер QR-кода: {v}")
        return v

    @validator('default_language')
    def validate_language(cls, v):
        v = v.lower().strip()
        if v not in ("en", "ar"):
            raise ValueError(f"Неподдерживаемый язык: {v}")
        return v

    @validator('log_level')
    def validate_log_level(cls, v):
        v = v.upper().strip()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Некорректный уровень логирования: {v}")
        return v

    def create_directories(self):
        """Создает директорию для файла логов."""
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    class Config:
        """Конфигурация настроек."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Игнорировать дополнительные поля из .env


# Глобальная переменная с настройками
settings = Settings()


def get_settings() -> Settings:
    """Возвращает объект настроек."""
    return settings


def load_settings_from_file(env_file: str = ".env") -> Settings:
    """
    Загружает настройки из указанного файла.

    Args:
        env_file: Путь к файлу с переменными окружения

    Returns:
        Settings: Объект настроек
    """
    return Settings(_env_file=env_file)


def create_env_example():
    """Создает пример файла .env."""
    env_example_content = """# Учетные данные администратора
ADMIN_USERNAME=admin
ADMIN_PASSWORD=password

# Настройки проверки
LOOKUP_DELAY=1.5
DEFAULT_IP_ADDRESS=192.168.1.1
SEED_DEMO_DATA=true

# Настройки QR-кодов
QR_CODE_BASE_URL=https://api.qrserver.com/v1/create-qr-code/
QR_CODE_SIZE=150x150

# Язык интерфейса (en или ar)
DEFAULT_LANGUAGE=en

# Настройки логирования
LOG_LEVEL=INFO
LOG_FILE=./logs/verifier.log

# Настройки веб-приложения
API_HOST=127.0.0.1
API_PORT=8000
DEBUG=false
"""

    with open(".env.example", "w", encoding="utf-8") as f:
        f.write(env_example_content)

    print("Создан файл .env.example с примером конфигурации")


def validate_settings():
    """Проверяет корректность настроек."""
    try:
        settings = get_settings()

        print("Проверка настроек:")
        print(f"  ✓ Администратор: {settings.admin_username}")
        print(f"  ✓ Задержка поиска: {settings.lookup_delay} с")
        print(f"  ✓ Демонстрационные данные: {'да' if settings.seed_demo_data else 'нет'}")
        print(f"  ✓ Сервис QR-кодов: {settings.qr_code_base_url} ({settings.qr_code_size})")
        print(f"  ✓ Язык: {settings.default_language}")
        print(f"  ✓ Веб-приложение: {settings.api_host}:{settings.api_port}")

        settings.create_directories()

        return True

    except Exception as e:
        print(f"Ошибка в настройках: {e}")
        return False


if __name__ == "__main__":
    # Создаем пример конфигурации
    create_env_example()

    # Проверяем настройки
    if not validate_settings():
        print("\nСоздайте файл .env на основе .env.example и укажите корректные значения")
    else:
        print("\nНастройки корректны!")
