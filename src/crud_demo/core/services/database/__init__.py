from .db_manage import DbManageService
from .db_session import DbSessionService, connect

__all__ = ["DbManageService", "DbSessionService", "connect"]
