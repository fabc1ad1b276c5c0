"""Centralized dependency type aliases for FastAPI routes.

Infrastructure dependencies live here; domain dependencies
(CurrentUserDep, StaffUserDep, InquiryServiceDep...) live next to
their domain:
    from lenddesk.core.deps import SessionDep, SettingsDep
"""

from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from lenddesk.core.settings import Settings, get_settings
from lenddesk.db.engine import get_session

# Database session
SessionDep = Annotated[Session, Depends(get_session)]

# Application settings
SettingsDep = Annotated[Settings, Depends(get_settings)]
