"""
Parcel database model.

One row per tracked shipment. Numbers are assigned by the database and
never handed out twice, even after the row is deleted.
"""

from sqlalchemy import Column, Integer, String, Text, Enum
from tracker.app.db.session import Base
from tracker.app.models.parcel_enums import ParcelStatus


class Parcel(Base):
    """
    Parcel model for the tracker.
    
    A parcel is registered by a client, carries a delivery address and
    moves through the ParcelStatus workflow.
    """
    __tablename__ = "parcel"
    __table_args__ = {"sqlite_autoincrement": True}
    
    number = Column(Integer, primary_key=True, autoincrement=True)
    
    # Ownership
    client = Column(Integer, nullable=False, index=True)
    
    # Status is stored as its lowercase value, not the member name
    status = Column(
        Enum(
            ParcelStatus,
            native_enum=False,
            length=20,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=ParcelStatus.REGISTERED,
    )
    
    # Delivery information
    address = Column(Text, nullable=False)
    
    # RFC3339 text, set once at creation
    created_at = Column(String(35), nullable=False)
    
    def __repr__(self):
        status = self.status.value if self.status is not None else None
        return f"<Parcel(number={self.number}, client={self.client}, status='{status}')>"
