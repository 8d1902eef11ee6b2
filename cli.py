"""
CLI интерфейс для проверки сертификатов
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

from config.settings import get_settings
from registry.exceptions import ExternalToolError, ValidationError
from registry.export import CertificateExporter
from registry.generator import CertificateIDGenerator
from registry.models import CertificateDetails
from registry.scanner import QRDecoder
from registry.state import create_application_state


class CertificateCLI:
    """CLI интерфейс для работы с реестром сертификатов"""

    def __init__(self):
        self.settings = get_settings()
        self.setup_logging()
        self.setup_state()

    def setup_logging(self):
        """Настройка логирования"""
        self.settings.create_directories()
        logging.basicConfig(
            level=getattr(logging, self.settings.log_level),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            handlers=[
                logging.FileHandler(self.settings.log_file, encoding='utf-8'),
                logging.StreamHandler()
            ]
        )
        self.logger = logging.getLogger(__name__)

    def setup_state(self):
        """Настройка состояния и внешних инструментов"""
        # Каждый запуск CLI начинает с чистого состояния в памяти
        self.state = create_application_state(self.settings)
        self.decoder = QRDecoder()
        self.exporter = CertificateExporter()
        self.id_generator = CertificateIDGenerator()

    def print_details(self, details: CertificateDetails):
        """Вывод информации о сертификате"""
        certificate = details.certificate
        print(f"✓ Сертификат найден:")
        print(f"  ID: {certificate.id}")
        print(f"  Выпускник: {certificate.student_name}")
        print(f"  Университет: {details.university_name}")
        print(f"  Степень: {certificate.degree}")
        print(f"  Специальность: {certificate.major}")
        print(f"  Дата выпуска: {certificate.graduation_date.strftime('%d.%m.%Y')}")
        print(f"  Дата выдачи: {certificate.issue_date.strftime('%d.%m.%Y')}")
        print(f"  QR-код: {certificate.qr_code_url}")

        if not details.is_complete:
            print("  ⚠️ Университет сертификата удален из реестра")

    async def _verify(self, candidate: str):
        try:
            result = await self.state.verification.verify(candidate)
        except ValidationError as e:
            print(f"✗ Ошибка валидации: {e}")
            sys.exit(1)

        if not result.found:
            print(f"✗ Сертификат {result.query} не найден")
            if not self.id_generator.validate_id_format(result.query):
                print("  Формат ID: XX-UNIVERSITY-YYYY-NNN, например CO-MIT-2024-417")
            return

        self.print_details(self.state.get_details(result.certificate))
        self.logger.info(f"Проверен сертификат {result.certificate.id}")

    async def verify_certificate(self, args):
        """Проверка сертификата по ID"""
        await self._verify(args.certificate_id)

    async def scan_certificate(self, args):
        """Проверка сертификата по изображению QR-кода"""
        try:
            decoded_text = self.decoder.decode(Path(args.image))
        except ExternalToolError as e:
            print(f"✗ Ошибка сканирования: {e}")
            self.logger.error(f"Ошибка сканирования {args.image}: {e}")
            sys.exit(1)

        print(f"QR-код: {decoded_text}")
        await self._verify(decoded_text)

    def list_records(self, args):
        """Список университетов или сертификатов"""
        if args.kind == 'universities':
            universities = self.state.store.list_universities()
            print(f"Университеты ({len(universities)}):")
            for university in universities:
                print(f"  {university.id}: {university.name} ({university.country})")
            return

        certificates = self.state.store.list_certificates()
        print(f"Сертификаты ({len(certificates)}):")
        for certificate in certificates:
            details = self.state.get_details(certificate)
            print(f"  {certificate.id}: {certificate.student_name}, {details.university_name}")

    def export_certificate(self, args):
        """Экспорт сертификата в PDF"""
        certificate = self.state.store.get_certificate(args.certificate_id)
        if certificate is None:
            print(f"✗ Сертификат {args.certificate_id} не найден")
            sys.exit(1)

        details = self.state.get_details(certificate)
        output = Path(args.output) if args.output else Path(self.exporter.filename(details))

        try:
            output.write_bytes(self.exporter.to_pdf(details))
        except (ExternalToolError, OSError) as e:
            print(f"✗ Ошибка экспорта: {e}")
            self.logger.error(f"Ошибка экспорта сертификата {certificate.id}: {e}")
            sys.exit(1)

        print(f"✓ Сертификат сохранен: {output}")

    def serve(self, args):
        """Запуск веб-приложения"""
        import uvicorn
        from api_server import create_app

        uvicorn.run(
            create_app(self.settings, self.state),
            host=args.host or self.settings.api_host,
            port=args.port or self.settings.api_port
        )

    def main(self, argv=None):
        """Главная функция CLI"""
        parser = argparse.ArgumentParser(
            description="Проверка сертификатов об образовании",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Примеры использования:
  %(prog)s verify CO-MIT-2023-482
  %(prog)s scan qr.png
  %(prog)s list certificates
  %(prog)s export CO-MIT-2023-482 -o certificate.pdf
  %(prog)s serve --port 8000
            """
        )

        subparsers = parser.add_subparsers(dest='command', help='Доступные команды')

        # Команда проверки
        verify_parser = subparsers.add_parser('verify', help='Проверка сертификата')
        verify_parser.add_argument('certificate_id', help='ID сертификата для проверки')

        # Команда сканирования
        scan_parser = subparsers.add_parser('scan', help='Проверка по изображению QR-кода')
        scan_parser.add_argument('image', help='Путь к изображению с QR-кодом')

        # Команда списка
        list_parser = subparsers.add_parser('list', help='Список записей реестра')
        list_parser.add_argument('kind', choices=['certificates', 'universities'], help='Тип записей')

        # Команда экспорта
        export_parser = subparsers.add_parser('export', help='Экспорт сертификата в PDF')
        export_parser.add_argument('certificate_id', help='ID сертификата')
        export_parser.add_argument('-o', '--output', help='Путь к PDF файлу')

        # Команда запуска веб-приложения
        serve_parser = subparsers.add_parser('serve', help='Запуск веб-приложения')
        serve_parser.add_argument('--host', help='Адрес')
        serve_parser.add_argument('--port', type=int, help='Порт')

        args = parser.parse_args(argv)

        if not args.command:
            parser.print_help()
            return

        if args.command == 'verify':
            asyncio.run(self.verify_certificate(args))
        elif args.command == 'scan':
            asyncio.run(self.scan_certificate(args))
        elif args.command == 'list':
            self.list_records(args)
        elif args.command == 'export':
            self.export_certificate(args)
        elif args.command == 'serve':
            self.serve(args)


def main():
    cli = CertificateCLI()
    cli.main()


if __name__ == '__main__':
    main()
