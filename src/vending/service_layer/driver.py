"""
Driver : boucle de publication avec file d'attente.

Le driver publie les events un par un, dans l'ordre de la file.
Quand publish retourne un event de suite, il est ajouté en fin de file
et sera publié plus tard (parcours en largeur, jamais de récursion).

La file est bornée : une chaîne de handlers qui s'émettraient des events
indéfiniment lève PublishLimitExceeded au lieu de boucler.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from vending import config
from vending.domain import events
from vending.service_layer import handlers, messagebus

logger = logging.getLogger(__name__)


class PublishLimitExceeded(Exception):
    """Levée quand le driver dépasse son nombre maximal de publications."""
    pass


class Driver:
    def __init__(
        self,
        bus: messagebus.PublishSubscribeService,
        max_publishes: Optional[int] = None,
        skip_unknown_machines: bool = False,
    ):
        self.bus = bus
        self.max_publishes = max_publishes if max_publishes is not None else config.get_max_publishes()
        self.skip_unknown_machines = skip_unknown_machines
        self.queue: list[events.Event] = []

    def run(self, pending: Iterable[events.Event]) -> list[events.Event]:
        """
        Publie tous les events en attente ainsi que leurs suites.

        Retourne la liste des events publiés, dans l'ordre de publication.
        Avec skip_unknown_machines, un event visant un distributeur inconnu
        est loggé puis ignoré ; sinon UnknownMachine remonte à l'appelant.
        """
        self.queue = list(pending)
        published: list[events.Event] = []
        while self.queue:
            if len(published) >= self.max_publishes:
                raise PublishLimitExceeded(
                    f"Plus de {self.max_publishes} publications, "
                    f"{len(self.queue)} event(s) encore en attente"
                )
            event = self.queue.pop(0)
            published.append(event)
            try:
                follow_up = self.bus.publish(event)
            except handlers.UnknownMachine:
                if not self.skip_unknown_machines:
                    raise
                logger.exception("Event ignoré : %s", event)
                continue
            if follow_up is not None:
                self.queue.append(follow_up)
        return published
