"""
Parcel Status Enumeration.
"""

import enum
from typing import Optional


class ParcelStatus(str, enum.Enum):
    """
    Parcel status enumeration.
    
    Status flow (forward only, no skipping):
        REGISTERED → SENT → DELIVERED
    """
    REGISTERED = "registered"
    SENT = "sent"
    DELIVERED = "delivered"

    @property
    def next_status(self) -> Optional["ParcelStatus"]:
        """The only status this one may move to, or None when terminal."""
        return _NEXT_STATUS.get(self)

    @property
    def previous_status(self) -> Optional["ParcelStatus"]:
        """The only status that may move to this one, or None for the initial state."""
        for source, target in _NEXT_STATUS.items():
            if target is self:
                return source
        return None

    def can_transition_to(self, target: "ParcelStatus") -> bool:
        return self.next_status is not None and self.next_status is ParcelStatus(target)


_NEXT_STATUS = {
    ParcelStatus.REGISTERED: ParcelStatus.SENT,
    ParcelStatus.SENT: ParcelStatus.DELIVERED,
}
