# backend/mathnotes/models/blob.py
from sqlalchemy import Column, String, LargeBinary, DateTime, Integer
from sqlalchemy.sql import func

from ..database import Base


class StoredBlob(Base):
    __tablename__ = "stored_blobs"

    name = Column(String(255), primary_key=True, index=True)
    data = Column(LargeBinary, nullable=False)
    size = Column(Integer, nullable=False, default=0)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )
