from dataclasses import dataclass

from src.agenda.core.services.auth import AuthService
from src.agenda.core.services.database import DbSessionService
from src.agenda.core.services.notifications import ToastStore
from src.agenda.core.services.session import UserSessionService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    user_session_service: UserSessionService
    auth_service: AuthService
    toast_store: ToastStore
