"""
Service publish/subscribe.

Le bus est le point central de dispatch des events vers les handlers
abonnés à leur type.

Fonctionnement de publish :
1. Le bus cherche la liste des handlers abonnés au type de l'event
2. Les handlers sont appelés dans l'ordre d'abonnement
3. Le premier handler qui retourne un event de suite interrompt la
   diffusion : cet event est retourné à l'appelant, les handlers
   suivants ne sont pas appelés
4. Si aucun handler ne retourne d'event, publish retourne None

Le bus ne publie jamais lui-même les events de suite : c'est le rôle
du driver, une fois l'appel à publish terminé.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from vending.domain import events

logger = logging.getLogger(__name__)


class Subscriber(Protocol):
    def handle(self, event: events.Event) -> Optional[events.Event]:
        ...


class PublishSubscribeService:
    """
    Table d'abonnements type -> handlers, et opération publish.

    Un même handler peut être abonné plusieurs fois au même type :
    il sera alors appelé autant de fois à chaque publication.
    """

    def __init__(self, subscribers: Optional[dict[str, list[Subscriber]]] = None):
        self.subscribers: dict[str, list[Subscriber]] = {
            event_type: list(handlers)
            for event_type, handlers in (subscribers or {}).items()
        }

    def subscribe(self, event_type: str, subscriber: Subscriber) -> None:
        logger.debug("Abonnement de %s aux events %s", subscriber, event_type)
        self.subscribers.setdefault(event_type, []).append(subscriber)

    def unsubscribe(self, event_type: str, subscriber: Subscriber) -> None:
        """Retire toutes les occurrences de `subscriber` (comparaison par identité)."""
        logger.debug("Désabonnement de %s des events %s", subscriber, event_type)
        if event_type not in self.subscribers:
            return
        self.subscribers[event_type] = [
            s for s in self.subscribers[event_type] if s is not subscriber
        ]

    def subscribers_for(self, event_type: str) -> list[Subscriber]:
        return list(self.subscribers.get(event_type, []))

    def publish(self, event: events.Event) -> Optional[events.Event]:
        """
        Diffuse un event jusqu'au premier event de suite.

        Les erreurs levées par un handler (ex : UnknownMachine) remontent
        telles quelles à l'appelant. Un type sans abonné n'est pas une
        erreur : rien n'est modifié et publish retourne None.
        """
        # Copie : un handler peut (dés)abonner pendant la diffusion
        handlers = self.subscribers_for(event.type)
        if not handlers:
            logger.debug("Aucun abonné pour l'event %s", event)
            return None

        logger.debug("Publication de %s vers %d abonné(s)", event, len(handlers))
        for handler in handlers:
            follow_up = handler.handle(event)
            if follow_up is not None:
                logger.debug("%s a émis %s", handler, follow_up)
                return follow_up
        return None
