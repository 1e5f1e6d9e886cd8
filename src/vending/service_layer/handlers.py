"""
Handlers (subscribers) des events du bus.

Chaque handler est abonné à un seul type d'event. Il partage le registre
des distributeurs avec les autres handlers et le modifie en place.
Il peut retourner au plus un event de suite (follow-up), que le driver
remettra dans la file ; sinon il retourne None.

- SaleHandler / RefillHandler : modifient le stock et émettent une alerte
  quand le seuil est franchi
- LowStockWarningHandler / StockOkHandler : observateurs purs, ils
  diffusent l'alerte sans toucher au stock
"""

from __future__ import annotations

import abc
import logging
from typing import TYPE_CHECKING, Optional

from vending.domain import events, model

if TYPE_CHECKING:
    from vending.adapters.notifications import AbstractNotifications
    from vending.adapters.repository import AbstractMachineRegistry

logger = logging.getLogger(__name__)


# --- Exceptions ---


class UnknownMachine(Exception):
    """Levée quand un event référence un distributeur absent du registre."""
    pass


# --- Handlers ---


class AbstractSubscriber(abc.ABC):
    """
    Base commune des handlers.

    Le registre est une référence partagée : il n'est pas copié, si bien que
    toutes les modifications de stock sont visibles des autres handlers
    invoqués ensuite.
    """

    def __init__(
        self,
        machines: AbstractMachineRegistry,
        factory: Optional[events.EventFactory] = None,
    ):
        self.machines = machines
        self.factory = factory or events.EventFactory()

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"

    @abc.abstractmethod
    def handle(self, event: events.Event) -> Optional[events.Event]:
        raise NotImplementedError

    def _get_machine(self, machine_id: str) -> model.Machine:
        machine = self.machines.find_by_id(machine_id)
        if machine is None:
            raise UnknownMachine(f"Distributeur inconnu : {machine_id}")
        return machine


class SaleHandler(AbstractSubscriber):
    def handle(self, event: events.MachineSaleEvent) -> Optional[events.LowStockWarningEvent]:
        """
        Décrémente le stock du distributeur, sans condition.

        Retourne une alerte LowStockWarningEvent si le stock résultant est
        sous le seuil, même s'il l'était déjà avant la vente.
        """
        machine = self._get_machine(event.machine_id)
        logger.debug("Vente de %d articles sur %s", event.sold_quantity, machine.id)
        machine.sell(event.sold_quantity)
        if machine.is_low_stock:
            return self.factory.low_stock(machine.stock_level, machine.id)
        return None


class RefillHandler(AbstractSubscriber):
    def handle(self, event: events.MachineRefillEvent) -> Optional[events.StockOkEvent]:
        """
        Incrémente le stock du distributeur, sans condition.

        Retourne StockOkEvent dès que le stock résultant atteint le seuil.
        """
        machine = self._get_machine(event.machine_id)
        logger.debug(
            "Réapprovisionnement de %d articles sur %s", event.refill_quantity, machine.id,
        )
        machine.refill(event.refill_quantity)
        if not machine.is_low_stock:
            return self.factory.stock_ok(machine.stock_level, machine.id)
        return None


class LowStockWarningHandler(AbstractSubscriber):
    """Diffuse les alertes de stock bas. Ne modifie pas le stock."""

    def __init__(
        self,
        machines: AbstractMachineRegistry,
        notifications: AbstractNotifications,
        factory: Optional[events.EventFactory] = None,
    ):
        super().__init__(machines, factory)
        self.notifications = notifications

    def handle(self, event: events.LowStockWarningEvent) -> None:
        self.notifications.send(
            event.machine_id,
            f"Stock trop bas : {event.stock_level} article(s) restant(s)",
        )
        return None


class StockOkHandler(AbstractSubscriber):
    """Diffuse les retours à un stock suffisant. Ne modifie pas le stock."""

    def __init__(
        self,
        machines: AbstractMachineRegistry,
        notifications: AbstractNotifications,
        factory: Optional[events.EventFactory] = None,
    ):
        super().__init__(machines, factory)
        self.notifications = notifications

    def handle(self, event: events.StockOkEvent) -> None:
        self.notifications.send(
            event.machine_id,
            f"Stock OK : {event.stock_level} article(s) en stock",
        )
        return None
