from datetime import datetime, timezone
from fastapi import APIRouter
from .. import config

router = APIRouter(tags=["meta"])

@router.get("/health")
def health():
    return {
        "ok": True,
        "persistence": config.PERSIST_RESULTS,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
