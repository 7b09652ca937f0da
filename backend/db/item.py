import uuid
from sqlalchemy import Boolean, Column, Date, DateTime, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from .database import Base


class Item(Base):
    __tablename__ = "items"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    # 'wooden-sleeper' | 'concrete-sleeper' | 'rail-liner' | 'rail-pad' | 'elastic-rail-clip'
    item_type = Column(Text, nullable=False, index=True)
    vendor_name = Column(String, nullable=False, index=True)

    supply_date = Column(Date, nullable=False)
    warranty_period = Column(Integer, nullable=False)  # months
    warranty_expiry_date = Column(Date, nullable=False, index=True)

    last_inspection_date = Column(Date, nullable=True, index=True)
    # 'excellent' | 'good' | 'fair' | 'poor'
    condition_status = Column(Text, nullable=False, default="good")
    inspection_notes = Column(Text, nullable=True)
    qr_code_url = Column(Text, nullable=True)

    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    inspections = relationship("Inspection", back_populates="item")
