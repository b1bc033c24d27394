# core/lazy.py
"""
Conteneur paresseux et thread-safe pour les ressources partagées
(settings, engine SQLAlchemy, services).

Remplace les variables globales de module construites à l'import :
    - construction différée au premier get()
    - double-checked locking → un seul objet même sous appels concurrents
    - reset() pour les tests
"""
import threading
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class Lazy(Generic[T]):

    def __init__(self, factory: Callable[[], T]):
        self._factory = factory
        self._value: Optional[T] = None
        self._lock = threading.Lock()

    def get(self) -> T:
        if self._value is None:
            with self._lock:
                if self._value is None:
                    self._value = self._factory()
        return self._value

    @property
    def is_initialized(self) -> bool:
        return self._value is not None

    def reset(self) -> None:
        with self._lock:
            self._value = None
