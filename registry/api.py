"""
Веб-приложение проверки сертификатов
"""
import logging
import uuid
from datetime import datetime
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response
from pydantic import BaseModel

from .exceptions import (
    AuthError, ExternalToolError, GenerationError, NotFoundError, ValidationError,
    VerificationInProgressError, VerifierError
)
from .export import CertificateExporter
from .models import CertificateRequest, Language, UniversityRequest
from .scanner import QRDecoder
from .state import ApplicationState


# Модели для API
class VerifyRequest(BaseModel):
    """Модель запроса проверки сертификата"""
    certificate_id: str = ""
    submission_id: Optional[str] = None


class LoginRequest(BaseModel):
    """Модель запроса входа администратора"""
    username: str = ""
    password: str = ""


# Коды ответа для ошибок системы
ERROR_STATUS_CODES = (
    (ValidationError, 400),
    (NotFoundError, 404),
    (AuthError, 401),
    (VerificationInProgressError, 409),
    (ExternalToolError, 502),
    (GenerationError, 500),
)


class CertificateAPI:
    """Веб-приложение поверх состояния процесса"""

    def __init__(
            self,
            state: ApplicationState,
            exporter: Optional[CertificateExporter] = None,
            decoder: Optional[QRDecoder] = None,
            default_language: str = "en",
            lifespan=None
    ):
        self.state = state
        self.exporter = exporter or CertificateExporter()
        self.decoder = decoder or QRDecoder()
        self.default_language = Language(default_language)
        self.logger = logging.getLogger(__name__)

        # Создание FastAPI приложения
        self.app = FastAPI(
            title="Certificate Verification",
            description="Проверка сертификатов об образовании и управление реестром",
            version="1.0.0",
            lifespan=lifespan
        )

        self._setup_routes()

    def _raise_http(self, error: VerifierError):
        """Преобразует ошибку системы в HTTP ответ"""
        for error_class, status_code in ERROR_STATUS_CODES:
            if isinstance(error, error_class):
                raise HTTPException(status_code=status_code, detail=str(error)) from error
        raise HTTPException(status_code=500, detail="Внутренняя ошибка сервера") from error

    def _require_admin(self) -> str:
        """Доступ к панели только после входа администратора"""
        try:
            return self.state.guard.require_admin()
        except AuthError as e:
            raise HTTPException(status_code=401, detail=str(e))

    def _language(self, lang: Optional[str]) -> Language:
        try:
            return Language(lang) if lang else self.default_language
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Неподдерживаемый язык: {lang}")

    @staticmethod
    def _client_ip(request: Request) -> Optional[str]:
        return request.client.host if request.client else None

    async def _verify_and_describe(self, candidate: str, request: Request, lang: Optional[str],
                                   submission_id: Optional[str] = None) -> dict:
        language = self._language(lang)
        # Без ключа формы каждый запрос считается отдельной отправкой
        submitter = submission_id or f"request-{uuid.uuid4().hex}"
        try:
            result = await self.state.verification.verify(candidate, self._client_ip(request), submitter)
        except VerifierError as e:
            self._raise_http(e)

        if not result.found:
            raise HTTPException(
                status_code=404,
                detail=f"Сертификат {result.query} не найден"
            )

        return {
            "status": result.status.value,
            "log_id": result.log.id,
            "details": self.state.get_details(result.certificate).to_dict(language)
        }

    def _setup_routes(self):
        """Настройка маршрутов"""

        @self.app.post("/verify")
        async def verify_certificate(payload: VerifyRequest, request: Request, lang: Optional[str] = None):
            """Проверка сертификата по введенному ID"""
            return await self._verify_and_describe(payload.certificate_id, request, lang, payload.submission_id)

        @self.app.post("/verify/scan")
        async def verify_scanned_certificate(request: Request, lang: Optional[str] = None,
                                            submission_id: Optional[str] = None):
            """Проверка сертификата по изображению QR-кода в теле запроса"""
            image = await request.body()
            if not image:
                raise HTTPException(status_code=400, detail="Изображение QR-кода не передано")

            try:
                decoded_text = await run_in_threadpool(self.decoder.decode, image)
            except ExternalToolError as e:
                self.logger.error(f"Ошибка сканирования QR-кода: {e}")
                self._raise_http(e)

            return await self._verify_and_describe(decoded_text, request, lang, submission_id)

        @self.app.get("/certificates/{certificate_id}/pdf")
        async def download_certificate_pdf(certificate_id: str):
            """Скачивание проверенного сертификата в PDF"""
            certificate = self.state.store.get_certificate(certificate_id)
            if certificate is None:
                raise HTTPException(status_code=404, detail=f"Сертификат {certificate_id} не найден")

            details = self.state.get_details(certificate)
            try:
                content = self.exporter.to_pdf(details)
            except ExternalToolError as e:
                self._raise_http(e)

            return Response(
                content=content,
                media_type="application/pdf",
                headers={"Content-Disposition": f'attachment; filename="{self.exporter.filename(details)}"'}
            )

        @self.app.get("/universities")
        async def list_public_universities():
            """Список университетов"""
            return [university.to_dict() for university in self.state.store.list_universities()]

        # Сессия администратора

        @self.app.post("/admin/login")
        async def login(payload: LoginRequest):
            """Вход администратора"""
            try:
                session = self.state.guard.login(payload.username, payload.password)
            except AuthError as e:
                self._raise_http(e)
            return session.model_dump()

        @self.app.post("/admin/logout")
        async def logout(confirm: bool = Query(False), username: str = Depends(self._require_admin)):
            """Выход администратора (требует confirm=true)"""
            if not self.state.guard.logout(confirm):
                raise HTTPException(status_code=400, detail="Выход требует подтверждения")
            return self.state.guard.session.model_dump()

        @self.app.get("/admin/session")
        async def get_session():
            """Текущее состояние сессии"""
            return self.state.guard.session.model_dump()

        @self.app.get("/admin/statistics")
        async def get_statistics(username: str = Depends(self._require_admin)):
            """Статистика панели администратора"""
            return self.state.get_statistics()

        # Университеты

        @self.app.get("/admin/universities")
        async def list_universities(username: str = Depends(self._require_admin)):
            return [university.to_dict() for university in self.state.store.list_universities()]

        @self.app.post("/admin/universities", status_code=201)
        async def add_university(payload: UniversityRequest, username: str = Depends(self._require_admin)):
            try:
                university = self.state.coordinator.add_university(payload)
            except VerifierError as e:
                self._raise_http(e)
            return university.to_dict()

        @self.app.put("/admin/universities/{university_id}")
        async def update_university(university_id: str, payload: UniversityRequest,
                                    username: str = Depends(self._require_admin)):
            try:
                university = self.state.coordinator.update_university(university_id, payload)
            except VerifierError as e:
                self._raise_http(e)
            return university.to_dict()

        @self.app.delete("/admin/universities/{university_id}")
        async def delete_university(university_id: str, confirm: bool = Query(False),
                                    username: str = Depends(self._require_admin)):
            """Удаление университета вместе с его сертификатами (требует confirm=true)"""
            try:
                deleted = self.state.coordinator.delete_university(university_id, confirm)
            except VerifierError as e:
                self._raise_http(e)
            if not deleted:
                raise HTTPException(status_code=400, detail="Удаление требует подтверждения")
            return {"deleted": university_id}

        # Сертификаты

        @self.app.get("/admin/certificates")
        async def list_certificates(username: str = Depends(self._require_admin)):
            result = []
            for certificate in self.state.store.list_certificates():
                item = certificate.to_dict()
                item["university_name"] = self.state.get_details(certificate).university_name
                result.append(item)
            return result

        @self.app.post("/admin/certificates", status_code=201)
        async def add_certificate(payload: CertificateRequest, username: str = Depends(self._require_admin)):
            try:
                certificate = self.state.coordinator.add_certificate(payload)
            except VerifierError as e:
                self._raise_http(e)
            return certificate.to_dict()

        @self.app.put("/admin/certificates/{certificate_id}")
        async def update_certificate(certificate_id: str, payload: CertificateRequest,
                                     username: str = Depends(self._require_admin)):
            try:
                certificate = self.state.coordinator.update_certificate(certificate_id, payload)
            except VerifierError as e:
                self._raise_http(e)
            return certificate.to_dict()

        @self.app.delete("/admin/certificates/{certificate_id}")
        async def delete_certificate(certificate_id: str, confirm: bool = Query(False),
                                     username: str = Depends(self._require_admin)):
            """Удаление сертификата (требует confirm=true)"""
            try:
                deleted = self.state.coordinator.delete_certificate(certificate_id, confirm)
            except VerifierError as e:
                self._raise_http(e)
            if not deleted:
                raise HTTPException(status_code=400, detail="Удаление требует подтверждения")
            return {"deleted": certificate_id}

        # Журнал

        @self.app.get("/admin/logs")
        async def list_logs(username: str = Depends(self._require_admin)):
            """Журнал проверок, последние записи первыми"""
            return [entry.to_dict() for entry in reversed(self.state.audit_log.list())]

        @self.app.get("/health")
        async def health_check():
            """Проверка здоровья приложения"""
            return {"status": "healthy", "timestamp": datetime.now().isoformat()}
