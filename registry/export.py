"""
Экспорт проверенного сертификата в PDF.
"""

import io
import logging
from datetime import datetime
from typing import Callable, Tuple

import qrcode
from PIL import Image, ImageDraw, ImageFont

from .exceptions import ExportError
from .models import CertificateDetails

logger = logging.getLogger(__name__)

# A4 в точках при 72 dpi
A4_POINTS = (595, 842)


class CertificateExporter:
    """Отрисовка сертификата и размещение его на странице A4."""

    def __init__(self, dpi: int = 150, margin: int = 20,
                 clock: Callable[[], datetime] = datetime.now):
        self.dpi = dpi
        self.margin = margin
        self.clock = clock
        self.canvas_size = (1400, 1000)

    @property
    def page_size(self) -> Tuple[int, int]:
        """Размер страницы A4 в пикселях при заданном dpi."""
        return tuple(round(points * self.dpi / 72) for points in A4_POINTS)

    def filename(self, details: CertificateDetails) -> str:
        return f"Certificate-{details.certificate.id}.pdf"

    def render(self, details: CertificateDetails) -> Image.Image:
        """
        Рисует сертификат.

        Raises:
            ExportError: Если университет сертификата не найден
        """
        if not details.is_complete:
            raise ExportError(f"Университет сертификата {details.certificate.id} не найден")

        certificate = details.certificate
        width, height = self.canvas_size
        image = Image.new("RGB", self.canvas_size, "white")
        draw = ImageDraw.Draw(image)

        draw.rectangle((20, 20, width - 20, height - 20), outline=(3, 105, 161), width=6)

        title_font = ImageFont.load_default(size=48)
        body_font = ImageFont.load_default(size=30)
        small_font = ImageFont.load_default(size=20)

        draw.text((width // 2, 110), details.university_name, font=title_font, fill=(3, 105, 161), anchor="mm")
        draw.text((width // 2, 180), "Certificate of Graduation", font=body_font, fill="black", anchor="mm")

        rows = [
            ("Student", certificate.student_name),
            ("Degree", certificate.degree),
            ("Major", certificate.major),
            ("Graduation date", certificate.graduation_date.isoformat()),
            ("Issue date", certificate.issue_date.isoformat()),
            ("Certificate ID", certificate.id),
        ]
        y = 280
        for label, value in rows:
            draw.text((100, y), f"{label}:", font=body_font, fill=(75, 85, 99))
            draw.text((420, y), value, font=body_font, fill="black")
            y += 70

        qr_image = self._qr_image(certificate.id, 260)
        image.paste(qr_image, (width - 100 - qr_image.width, 280))

        disclaimer = (
            f"Verified on {self.clock().strftime('%Y-%m-%d %H:%M')} "
            f"against the records of {details.university_name}."
        )
        draw.text((width // 2, height - 70), disclaimer, font=small_font, fill=(107, 114, 128), anchor="mm")
        return image

    def to_pdf(self, details: CertificateDetails) -> bytes:
        """
        Формирует одностраничный PDF с изображением сертификата.

        Returns:
            bytes: Содержимое PDF файла

        Raises:
            ExportError: Если документ не удалось сформировать
        """
        rendered = self.render(details)

        try:
            page = Image.new("RGB", self.page_size, "white")
            box = self.fit(rendered.size, page.size)
            page.paste(rendered.resize((box[2], box[3])), (box[0], box[1]))

            buffer = io.BytesIO()
            page.save(buffer, "PDF", resolution=float(self.dpi))
        except Exception as e:
            logger.error(f"Ошибка формирования PDF для {details.certificate.id}: {e}")
            raise ExportError(f"Ошибка формирования PDF: {e}")

        logger.info(f"Сформирован PDF для сертификата {details.certificate.id}")
        return buffer.getvalue()

    def fit(self, image_size: Tuple[int, int], page_size: Tuple[int, int]) -> Tuple[int, int, int, int]:
        """
        Вписывает изображение в страницу по ширине с полями, сохраняя пропорции.

        Returns:
            Tuple[int, int, int, int]: x, y, ширина, высота
        """
        page_width, page_height = page_size
        ratio = image_size[0] / image_size[1]

        width = page_width - 2 * self.margin
        height = width / ratio
        if height > page_height - 2 * self.margin:
            height = page_height - 2 * self.margin
            width = height * ratio

        x = (page_width - width) / 2
        return round(x), self.margin, round(width), round(height)

    def _qr_image(self, data: str, size: int) -> Image.Image:
        qr = qrcode.QRCode(box_size=10, border=2)
        qr.add_data(data)
        qr.make(fit=True)
        img = qr.make_image(fill_color="black", back_color="white").convert("RGB")
        return img.resize((size, size))
