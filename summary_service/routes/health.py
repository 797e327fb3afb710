from fastapi import APIRouter

from ..schemas import HealthStatus
from ..services.health import health_status

router = APIRouter(tags=["summary"])


@router.get("/health", response_model=HealthStatus)
def health():
    return health_status()
