# teampulse/shared/models/Vibe.py
"""
Vibe Check : signal quotidien d'humeur d'un membre d'équipe (score 1-5).

Immuable une fois créé. Expose team_id / submitted_at / vibe_score :
les lignes sont passées telles quelles à engine/metrics.
"""
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from teampulse.core.database import Base


class VibeSubmission(Base):
    __tablename__ = "vibe_submissions"
    __table_args__ = (
        CheckConstraint("vibe_score BETWEEN 1 AND 5", name="ck_vibe_score_range"),
    )

    id             = Column(Integer, primary_key=True, index=True)
    team_id        = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    participant_id = Column(String, nullable=False, index=True)   # device id anonyme

    vibe_score = Column(Integer, nullable=False)     # 1 à 5
    comment    = Column(String, nullable=True)

    submitted_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    # ── Relations ────────────────────────────────────────────
    team = relationship("Team", back_populates="submissions")

    def __repr__(self):
        return f"<VibeSubmission id={self.id} team={self.team_id} score={self.vibe_score}>"
