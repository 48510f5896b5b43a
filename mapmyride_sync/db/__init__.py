from mapmyride_sync.db.base import Base
from mapmyride_sync.db.session import create_engine_for, create_session_maker, init_db

__all__ = ["Base", "create_engine_for", "create_session_maker", "init_db"]
