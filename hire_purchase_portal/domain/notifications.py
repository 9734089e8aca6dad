"""User-facing notifications for failed backend calls"""

from dataclasses import asdict, dataclass
from typing import Dict

from hire_purchase_portal.domain.exceptions import PortalAPIError


@dataclass(frozen=True)
class Notification:
    """Dismissable toast shown to the operator"""

    title: str
    description: str
    variant: str = "default"  # "default" or "destructive"

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def notification_from_error(error: Exception, fallback: str) -> Notification:
    """Use the backend's own message when it sent one, else the generic fallback"""
    message = error.message if isinstance(error, PortalAPIError) and error.message else fallback
    return Notification(title="Error", description=message, variant="destructive")
