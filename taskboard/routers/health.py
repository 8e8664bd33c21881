from datetime import datetime, timezone
from fastapi import APIRouter

router = APIRouter()

@router.get("/health")
def health():
    # Check si l'API est up (ne touche pas la DB)
    return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}
