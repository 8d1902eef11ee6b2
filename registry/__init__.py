"""
Основной модуль бизнес-логики реестра сертификатов.
"""

from .state import ApplicationState, create_application_state
from .models import Certificate, CertificateRequest, University, UniversityRequest, VerificationLog
from .storage import RecordStore
from .audit import AuditLog
from .verification import VerificationEngine
from .session import AdminSessionGuard, StaticCredentialAuthenticator
from .service import CrudCoordinator

__version__ = "1.0.0"

__all__ = [
    'ApplicationState',
    'create_application_state',
    'Certificate',
    'CertificateRequest',
    'University',
    'UniversityRequest',
    'VerificationLog',
    'RecordStore',
    'AuditLog',
    'VerificationEngine',
    'AdminSessionGuard',
    'StaticCredentialAuthenticator',
    'CrudCoordinator'
]
