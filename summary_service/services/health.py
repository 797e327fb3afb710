from datetime import datetime, timezone

from ..schemas import HealthStatus


def health_status() -> HealthStatus:
    now = datetime.now(timezone.utc)
    return HealthStatus(status="healthy", timestamp=now.isoformat(timespec="milliseconds").replace("+00:00", "Z"))
