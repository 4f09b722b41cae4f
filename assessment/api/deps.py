"""
Shared request dependencies
"""
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from assessment.database import get_db
from assessment.services.storage import StorageService


def get_storage(db: Session = Depends(get_db)) -> StorageService:
    """Storage collaborator bound to the request's session"""
    return StorageService(db)


def get_current_user_id(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id")
) -> Optional[str]:
    """
    Identity resolved upstream by the auth gateway

    Returns None when no identity was forwarded; the services decide how to fail.
    """
    if x_user_id is None or not x_user_id.strip():
        return None
    return x_user_id.strip()
