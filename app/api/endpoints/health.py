"""
Health check and monitoring endpoints.

Provides health status for the storage backend and the session store.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict
from fastapi import APIRouter, Depends, status

from app.core.deps import get_session_store, get_storage
from app.core.sessions import SessionStore
from app.core.storage import StorageBackend

router = APIRouter(tags=["Health"])
logger = logging.getLogger(__name__)


@router.get("/health", status_code=status.HTTP_200_OK)
def health_check() -> Dict[str, str]:
    """
    Basic health check endpoint.

    Returns 200 OK if the service is running.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/health/detailed", status_code=status.HTTP_200_OK)
def detailed_health_check(
    storage: StorageBackend = Depends(get_storage),
    session_store: SessionStore = Depends(get_session_store)
) -> Dict[str, Any]:
    """
    Detailed health check with dependency status.

    Checks:
    - Storage backend reachability
    - Session store reachability
    """
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {}
    }

    try:
        storage.get_user(0)
        health_status["checks"]["storage"] = {
            "status": "healthy",
            "backend": type(storage).__name__
        }
    except Exception as e:
        logger.error(f"Storage health check failed: {e}")
        health_status["status"] = "unhealthy"
        health_status["checks"]["storage"] = {
            "status": "unhealthy",
            "backend": type(storage).__name__
        }

    try:
        session_store.get("health-check")
        health_status["checks"]["sessions"] = {
            "status": "healthy",
            "backend": type(session_store).__name__
        }
    except Exception as e:
        logger.error(f"Session store health check failed: {e}")
        health_status["status"] = "unhealthy"
        health_status["checks"]["sessions"] = {
            "status": "unhealthy",
            "backend": type(session_store).__name__
        }

    return health_status
