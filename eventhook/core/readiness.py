# eventhook/core/readiness.py
from __future__ import annotations
import logging

log = logging.getLogger(__name__)

class ReadinessGate:
    """
    Etat de la session Discord vu par le webhook.
    Seul on_ready écrit (une fois); le reste du code ne fait que lire.
    Pas de retour à False: pas de gestion de la perte de connexion.
    """

    def __init__(self) -> None:
        self._ready = False

    def is_ready(self) -> bool:
        return self._ready

    def mark_ready(self) -> None:
        if self._ready:
            return
        self._ready = True
        log.info("Readiness gate open: webhook dispatch enabled")
