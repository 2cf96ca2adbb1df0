# app/models/match.py
import uuid
from sqlalchemy import Column, TEXT, INT, CHAR, TIMESTAMP, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from app.core.database import Base

class Match(Base):
    __tablename__ = "matches"
    # (project_id, freelancer_id) 唯一：重新媒合會覆蓋舊的分數與理由
    __table_args__ = (
        UniqueConstraint("project_id", "freelancer_id", name="uq_match_project_freelancer"),
    )

    id = Column(CHAR(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    project_id = Column(CHAR(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    freelancer_id = Column(CHAR(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    match_score = Column(INT, nullable=False)
    match_reason = Column(TEXT)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    project = relationship("Project", back_populates="matches", lazy="selectin")
