"""
Events du domaine.

Les events représentent des faits survenus sur un distributeur (vente,
réapprovisionnement) ou des alertes qui en découlent (stock bas, stock OK).
Ils sont immuables : une fois créés, ils sont consommés une seule fois
par le bus puis oubliés.

Chaque event porte un discriminant `type` (la clé d'abonnement dans le bus)
et l'identifiant du distributeur ciblé.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Callable, ClassVar, Optional

logger = logging.getLogger(__name__)

SALE = "sale"
REFILL = "refill"
LOW_STOCK = "low-stock"
STOCK_OK = "stock-ok"


class Event:
    """Classe de base pour tous les events du domaine."""

    type: ClassVar[str]
    machine_id: str

    def as_dict(self) -> dict[str, Any]:
        return {"type": self.type, **asdict(self)}


@dataclass(frozen=True)
class MachineSaleEvent(Event):
    """Des articles ont été vendus par un distributeur."""

    type: ClassVar[str] = SALE

    sold_quantity: int
    machine_id: str


@dataclass(frozen=True)
class MachineRefillEvent(Event):
    """Un distributeur a été réapprovisionné."""

    type: ClassVar[str] = REFILL

    refill_quantity: int
    machine_id: str


@dataclass(frozen=True)
class LowStockWarningEvent(Event):
    """Le stock d'un distributeur est passé sous le seuil d'alerte."""

    type: ClassVar[str] = LOW_STOCK

    stock_level: int
    machine_id: str


@dataclass(frozen=True)
class StockOkEvent(Event):
    """Le stock d'un distributeur est revenu au-dessus du seuil d'alerte."""

    type: ClassVar[str] = STOCK_OK

    stock_level: int
    machine_id: str


def log_creation(event: Event) -> None:
    logger.debug("Event créé : %s", event)


class EventFactory:
    """
    Fabrique d'events avec un observateur de création injecté.

    Tout event créé par l'application passe par ici (générateur,
    handlers, entrypoints), ce qui donne un point d'extension unique
    pour tracer les créations. Par défaut, l'observateur écrit une
    ligne de debug dans le logger du module.
    """

    def __init__(self, on_created: Optional[Callable[[Event], None]] = None):
        self.on_created = on_created or log_creation

    def sale(self, sold_quantity: int, machine_id: str) -> MachineSaleEvent:
        return self._created(MachineSaleEvent(sold_quantity, machine_id))

    def refill(self, refill_quantity: int, machine_id: str) -> MachineRefillEvent:
        return self._created(MachineRefillEvent(refill_quantity, machine_id))

    def low_stock(self, stock_level: int, machine_id: str) -> LowStockWarningEvent:
        return self._created(LowStockWarningEvent(stock_level, machine_id))

    def stock_ok(self, stock_level: int, machine_id: str) -> StockOkEvent:
        return self._created(StockOkEvent(stock_level, machine_id))

    def _created(self, event):
        self.on_created(event)
        return event
