# teampulse/shared/enums.py
"""
Toutes les énumérations du projet TeamPulse.

Source unique de vérité pour les états, tendances et niveaux.
Importé par les modèles, schemas, services et engine.
Valeurs str : sérialisées telles quelles dans les réponses JSON.
"""

from enum import Enum


class DayState(str, Enum):
    INSUFFICIENT = "insufficient"   # Complétion sous le minimum → non scoré
    AT_RISK      = "at_risk"
    NEUTRAL      = "neutral"
    HEALTHY      = "healthy"


class WeekState(str, Enum):
    INSUFFICIENT = "insufficient"   # Moins de MIN_WEEK_SCORED_DAYS jours exploitables
    AT_RISK      = "at_risk"
    NEUTRAL      = "neutral"
    HEALTHY      = "healthy"


class Trend(str, Enum):
    IMPROVING         = "improving"
    STABLE            = "stable"
    DECLINING         = "declining"
    INSUFFICIENT_DATA = "insufficient_data"   # Sentinelle : jamais directionnelle


class DataMaturity(str, Enum):
    INSUFFICIENT = "insufficient"
    EMERGING     = "emerging"
    ESTABLISHED  = "established"


class ConfidenceLevel(str, Enum):
    LOW      = "low"
    MODERATE = "moderate"
    HIGH     = "high"


class VibeZone(str, Enum):
    HIGH_CONFIDENCE = "high_confidence"
    STEADY_STATE    = "steady_state"
    MIXED_SIGNALS   = "mixed_signals"
    UNDER_PRESSURE  = "under_pressure"


class ParticipationState(str, Enum):
    AWAITING_SIGNAL = "awaiting_signal"
    SIGNAL_EMERGING = "signal_emerging"
    DAY_COMPLETE    = "day_complete"


class InsightType(str, Enum):
    PARTICIPATION = "participation"
    TREND         = "trend"
    PATTERN       = "pattern"
    MILESTONE     = "milestone"


class InsightSeverity(str, Enum):
    INFO      = "info"
    ATTENTION = "attention"
    WARNING   = "warning"


class InsightPolarity(str, Enum):
    POSITIVE = "positive"
    NEUTRAL  = "neutral"
    CONCERN  = "concern"   # Utilisé par le dashboard pour le style d'alerte


class Language(str, Enum):
    NL = "nl"
    EN = "en"
