# app/models/application.py
import uuid
import enum
from sqlalchemy import Column, TEXT, DECIMAL, ForeignKey, TIMESTAMP, CHAR, Enum, func
from sqlalchemy.orm import relationship
from app.core.database import Base

class ApplicationStatusEnum(str, enum.Enum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"

class Application(Base):
    __tablename__ = "applications"

    id = Column(CHAR(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    project_id = Column(CHAR(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    freelancer_id = Column(CHAR(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    cover_letter = Column(TEXT)
    proposed_rate = Column(DECIMAL(10, 2))
    status = Column(
        Enum(ApplicationStatusEnum, values_callable=lambda obj: [e.value for e in obj]),
        nullable=False,
        default=ApplicationStatusEnum.pending
    )
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    project = relationship("Project", back_populates="applications", lazy="selectin")
    freelancer = relationship("Profile", lazy="selectin")
