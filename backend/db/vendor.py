import uuid
from sqlalchemy import JSON, Column, DateTime, String, Uuid
from sqlalchemy.sql import func
from .database import Base


class Vendor(Base):
    __tablename__ = "vendors"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False, unique=True, index=True)
    contact_info = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
