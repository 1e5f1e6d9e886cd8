"""
Adapter pour les notifications d'alerte de stock.

Les handlers d'alerte ne savent pas comment une alerte est diffusée ;
ils passent par cette abstraction, injectée au bootstrap.
"""

from __future__ import annotations

import abc
import logging

logger = logging.getLogger(__name__)


class AbstractNotifications(abc.ABC):
    """Interface abstraite pour les notifications."""

    @abc.abstractmethod
    def send(self, machine_id: str, message: str) -> None:
        raise NotImplementedError


class LoggingNotifications(AbstractNotifications):
    """Implémentation concrète qui écrit les alertes dans les logs."""

    def send(self, machine_id: str, message: str) -> None:
        logger.info("[distributeur %s] %s", machine_id, message)
