from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from gtonline.core.database import Base


class User(Base):
    __tablename__ = "users"

    email = Column(String(250), primary_key=True)
    password = Column(String(250), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    profile = relationship("RegularUser", back_populates="user", uselist=False, cascade="all, delete-orphan")
