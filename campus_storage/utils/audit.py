# ================================
# AUDIT LOGGING UTILITY (utils/audit.py)
# ================================

from typing import Optional, Dict, Any
from datetime import date, datetime, timezone
from decimal import Decimal
import uuid
import logging

logger = logging.getLogger("campus_storage.audit")


class AuditLogger:
    """
    Structured business-event logging.

    Every mutating service call emits one event (e.g. 'BOOKING_CREATED',
    'LISTING_DEACTIVATED') through the ``campus_storage.audit`` logger.
    Values are made JSON-friendly so log shippers can index them.
    """

    def log_business_event(
        self,
        action: str,
        actor_id: Optional[uuid.UUID],
        resource_type: str,
        resource_id: Optional[uuid.UUID],
        old_values: Optional[Dict[str, Any]] = None,
        new_values: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Log a create/update/status event on a marketplace record.

        Args:
            action: Business action (e.g., 'LISTING_CREATED')
            actor_id: Profile performing the action
            resource_type: 'storage_space', 'booking', 'review' or 'profile'
            resource_id: ID of the affected record
            old_values: Previous values (for updates)
            new_values: New values (for creates/updates)

        Returns:
            The emitted event
        """
        event = {
            "action": action,
            "actor_id": self._serialize(actor_id),
            "resource_type": resource_type,
            "resource_id": self._serialize(resource_id),
            "old_values": self._serialize(old_values or {}),
            "new_values": self._serialize(new_values or {}),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        logger.info(f"{action} {resource_type}={event['resource_id']}", extra={"audit": event})
        return event

    def _serialize(self, value: Any) -> Any:
        if isinstance(value, dict):
            return {key: self._serialize(item) for key, item in value.items()}
        if isinstance(value, (list, tuple, set)):
            return [self._serialize(item) for item in value]
        if isinstance(value, (uuid.UUID, Decimal)):
            return str(value)
        if isinstance(value, (date, datetime)):
            return value.isoformat()
        return value
