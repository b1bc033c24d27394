# core/logging.py
import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configuration racine, appelée une fois au démarrage de l'API."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # SQLAlchemy est très bavard en DEBUG
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
