"""
RK Media Server v1.0.0 - API Dependencies
Authentication and core service wiring for routes
"""

from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ..config import settings
from ..database import get_db
from ..services import LibraryLocks, LibraryRegistry, MediaIndexer, UploadIngestor
from ..services.probe import DurationProbe

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Dict[str, Any]:
    """
    Verify the bearer JWT and return its claims

    Tokens are issued by the auth service; only verification happens here.
    """
    if credentials is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return jwt.decode(
            credentials.credentials,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except jwt.PyJWTError:
        raise HTTPException(
            status_code=401,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_base_dir(request: Request) -> str:
    return request.app.state.base_dir


def get_prober(request: Request) -> DurationProbe:
    return request.app.state.prober


def get_locks(request: Request) -> LibraryLocks:
    return request.app.state.library_locks


def get_registry(
    db: Session = Depends(get_db),
    base_dir: str = Depends(get_base_dir),
    locks: LibraryLocks = Depends(get_locks),
) -> LibraryRegistry:
    return LibraryRegistry(db, base_dir, locks)


def get_indexer(
    db: Session = Depends(get_db),
    prober: DurationProbe = Depends(get_prober),
    locks: LibraryLocks = Depends(get_locks),
) -> MediaIndexer:
    return MediaIndexer(db, prober, locks)


def get_ingestor(
    db: Session = Depends(get_db),
    base_dir: str = Depends(get_base_dir),
    prober: DurationProbe = Depends(get_prober),
    locks: LibraryLocks = Depends(get_locks),
) -> UploadIngestor:
    return UploadIngestor(db, base_dir, prober, locks)
