"""
Считывание ID сертификата из QR-кода: с загруженного изображения или с камеры.
"""

import io
import logging
from pathlib import Path
from typing import Callable, Optional, Union

from PIL import Image, UnidentifiedImageError

from .exceptions import ScanError, VerifierError
from .models import VerificationResult
from .verification import VerificationEngine

logger = logging.getLogger(__name__)

ImageInput = Union[str, Path, bytes, Image.Image]


class QRDecoder:
    """Распознавание QR-кодов через pyzbar."""

    def decode(self, image: ImageInput) -> str:
        """
        Извлекает текст первого QR-кода на изображении.

        Args:
            image: Путь к файлу, содержимое файла или изображение Pillow

        Returns:
            str: Распознанный текст

        Raises:
            ScanError: Если изображение не читается или QR-код не найден
        """
        # pyzbar загружает системную libzbar при импорте
        try:
            from pyzbar import pyzbar
        except ImportError as e:
            raise ScanError(f"Библиотека распознавания QR-кодов недоступна: {e}")

        picture = self._open(image)

        try:
            decoded_objects = pyzbar.decode(picture)
        except Exception as e:
            logger.error(f"Ошибка распознавания QR-кода: {e}")
            raise ScanError(f"Ошибка распознавания QR-кода: {e}")

        for obj in decoded_objects:
            if obj.type == "QRCODE":
                return obj.data.decode("utf-8", errors="ignore")

        raise ScanError("QR-код на изображении не найден")

    def _open(self, image: ImageInput) -> Image.Image:
        if isinstance(image, Image.Image):
            return image
        try:
            if isinstance(image, bytes):
                picture = Image.open(io.BytesIO(image))
            else:
                picture = Image.open(image)
            picture.load()
            return picture
        except (OSError, UnidentifiedImageError) as e:
            logger.error(f"Не удалось открыть изображение: {e}")
            raise ScanError(f"Не удалось открыть изображение: {e}")


class ScanSource:
    """Источник распознанного текста, например камера."""

    def start(self, on_decoded: Callable[[str], None]) -> None:
        raise NotImplementedError

    def stop(self) -> None:
        raise NotImplementedError


class ScanController:
    """
    Управляет сессиями сканирования.

    Одновременно активна не более одной сессии: запуск новой сначала
    останавливает предыдущую.
    """

    def __init__(self, engine: VerificationEngine, decoder: Optional[QRDecoder] = None):
        self.engine = engine
        self.decoder = decoder or QRDecoder()
        self._active: Optional[ScanSource] = None
        self._on_result: Optional[Callable[[VerificationResult], None]] = None
        self._on_error: Optional[Callable[[VerifierError], None]] = None
        self._ip_address: Optional[str] = None

    @property
    def is_scanning(self) -> bool:
        return self._active is not None

    def start(self, source: ScanSource,
              on_result: Optional[Callable[[VerificationResult], None]] = None,
              on_error: Optional[Callable[[VerifierError], None]] = None,
              ip_address: str = None) -> None:
        """
        Запускает сессию сканирования.

        Args:
            source: Источник распознанного текста
            on_result: Вызывается с результатом проверки считанного ID
            on_error: Вызывается с ошибкой проверки (например, пустой QR-код)
            ip_address: Адрес клиента для журнала

        Raises:
            ScanError: Если источник не удалось запустить
        """
        self.stop()

        self._active = source
        self._on_result = on_result
        self._on_error = on_error
        self._ip_address = ip_address

        try:
            source.start(self._handle_decoded)
        except Exception as e:
            logger.error(f"Не удалось запустить сканирование: {e}")
            self._active = None
            raise ScanError(f"Не удалось запустить сканирование: {e}")

        logger.info("Сканирование запущено")

    def stop(self) -> None:
        """Останавливает активную сессию, если она есть."""
        source, self._active = self._active, None
        if source is None:
            return

        try:
            source.stop()
        except Exception as e:
            # Сессия уже считается остановленной, сбой освобождения только фиксируем
            logger.error(f"Не удалось остановить сканер: {e}")
        else:
            logger.info("Сканирование остановлено")

    def scan_file(self, image: ImageInput, ip_address: str = None) -> VerificationResult:
        """
        Проверяет сертификат по QR-коду на изображении.

        Raises:
            ScanError: Если QR-код не распознан (запись в журнал не добавляется)
            RequiredFieldError: Если QR-код пустой
        """
        decoded_text = self.decoder.decode(image)
        logger.info(f"Из изображения считан QR-код: {decoded_text!r}")
        return self.engine.lookup(decoded_text, ip_address)

    def _handle_decoded(self, decoded_text: str) -> None:
        if self._active is None:
            return

        on_result, on_error, ip_address = self._on_result, self._on_error, self._ip_address
        self.stop()

        try:
            result = self.engine.lookup(decoded_text, ip_address)
        except VerifierError as e:
            if on_error is None:
                raise
            on_error(e)
            return

        if on_result is not None:
            on_result(result)
