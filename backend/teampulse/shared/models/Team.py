# teampulse/shared/models/Team.py
"""
Équipe suivie par le Vibe Check.

expected_team_size : base du completion_ratio. NULL → le service retombe
                     sur le nombre de participants distincts.
timezone           : fuseau IANA utilisé pour découper les soumissions en jours.
"""
import secrets

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from teampulse.core.database import Base


class Team(Base):
    __tablename__ = "teams"

    id       = Column(Integer, primary_key=True, index=True)
    owner_id = Column(String, nullable=False, index=True)   # id du fournisseur d'auth externe

    name = Column(String, nullable=False)
    slug = Column(
        String,
        default=lambda: secrets.token_urlsafe(8),
        unique=True,
        nullable=False,
    )

    expected_team_size = Column(Integer, nullable=True)
    timezone           = Column(String, nullable=True)     # ex: "Europe/Amsterdam"

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # ── Relations ────────────────────────────────────────────
    submissions = relationship("VibeSubmission", back_populates="team", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Team id={self.id} name={self.name!r} size={self.expected_team_size}>"
