"""
FastAPI сервер веб-приложения проверки сертификатов
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import Settings, get_settings
from registry.api import CertificateAPI
from registry.state import ApplicationState, create_application_state


def setup_logging(settings: Settings):
    """Настройка логирования"""
    settings.create_directories()
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(settings.log_file, encoding='utf-8'),
            logging.StreamHandler()
        ]
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    state = app.state.application_state
    logging.info(
        f"Запуск веб-приложения: университетов {len(state.store.list_universities())}, "
        f"сертификатов {len(state.store.list_certificates())}"
    )

    yield

    # Данные хранятся только в памяти процесса и теряются при остановке
    logging.info(f"Остановка веб-приложения, выполнено проверок: {len(state.audit_log)}")


def create_app(settings: Optional[Settings] = None, state: Optional[ApplicationState] = None) -> FastAPI:
    """Создание FastAPI приложения"""
    settings = settings or get_settings()
    setup_logging(settings)

    state = state or create_application_state(settings)
    certificate_api = CertificateAPI(state, default_language=settings.default_language, lifespan=lifespan)

    app = certificate_api.app
    app.state.application_state = state
    app.state.certificate_api = certificate_api

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # В продакшене указать конкретные домены
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app


# Создание приложения
app = create_app()

if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    # Состояние хранится в памяти процесса, поэтому воркер один
    uvicorn.run(
        "api_server:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug
    )
