"""
Générateur d'events aléatoires pour la simulation.

Produit des ventes (1 ou 2 articles) et des réapprovisionnements
(3 ou 5 articles) avec la même probabilité, sur un distributeur tiré
au hasard. Le générateur aléatoire est injectable pour rendre une
simulation reproductible.
"""

from __future__ import annotations

import random
from typing import Optional, Sequence

from vending.domain import events

SALE_QUANTITIES = (1, 2)
REFILL_QUANTITIES = (3, 5)


class RandomEventGenerator:
    def __init__(
        self,
        factory: events.EventFactory,
        machine_ids: Sequence[str],
        rng: Optional[random.Random] = None,
    ):
        if not machine_ids:
            raise ValueError("Au moins un distributeur est nécessaire")
        self.factory = factory
        self.machine_ids = list(machine_ids)
        self.rng = rng or random.Random()

    def next_event(self) -> events.Event:
        machine_id = self.rng.choice(self.machine_ids)
        if self.rng.random() < 0.5:
            return self.factory.sale(self.rng.choice(SALE_QUANTITIES), machine_id)
        return self.factory.refill(self.rng.choice(REFILL_QUANTITIES), machine_id)

    def generate(self, count: int) -> list[events.Event]:
        return [self.next_event() for _ in range(count)]
