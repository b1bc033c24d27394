# teampulse/shared/models/__init__.py
"""
Point d'entrée unique pour tous les modèles SQLAlchemy.

TOUJOURS importer les modèles depuis ce fichier :
  from teampulse.shared.models import Team, VibeSubmission

→ Garantit que tous les modèles sont enregistrés dans Base.metadata
  avant la création des tables.
"""

from teampulse.shared.models.Team import Team
from teampulse.shared.models.Vibe import VibeSubmission

__all__ = [
    "Team",
    "VibeSubmission",
]
