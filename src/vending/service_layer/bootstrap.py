"""
Bootstrap : assemblage de l'application (Composition Root).

Ce module construit le registre des distributeurs, les quatre handlers
et le bus, puis abonne chaque handler à son type d'event.

C'est le seul endroit de l'application qui connaît les
implémentations concrètes de chaque abstraction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from vending import config
from vending.adapters import notifications, repository
from vending.domain import events
from vending.service_layer import driver, handlers, messagebus


@dataclass
class VendingApp:
    """Les composants assemblés, exposés aux entrypoints et aux tests."""

    bus: messagebus.PublishSubscribeService
    machines: repository.AbstractMachineRegistry
    factory: events.EventFactory
    subscribers: dict[str, handlers.AbstractSubscriber] = field(default_factory=dict)

    def subscribe_defaults(self) -> None:
        for event_type, handler in self.subscribers.items():
            self.bus.subscribe(event_type, handler)

    def make_driver(self, **options) -> driver.Driver:
        return driver.Driver(self.bus, **options)


def bootstrap(
    machines: Optional[repository.AbstractMachineRegistry] = None,
    notifications_adapter: Optional[notifications.AbstractNotifications] = None,
    factory: Optional[events.EventFactory] = None,
    subscribe_defaults: bool = True,
) -> VendingApp:
    """
    Construit et retourne une application configurée.

    En production, le registre est créé à partir de la configuration.
    En test, on injecte des fakes via les paramètres.
    """
    if machines is None:
        machines = repository.MachineRegistry.with_machines(
            config.get_machine_ids(), config.get_initial_stock_level()
        )

    if notifications_adapter is None:
        notifications_adapter = notifications.LoggingNotifications()

    if factory is None:
        factory = events.EventFactory()

    app = VendingApp(
        bus=messagebus.PublishSubscribeService(),
        machines=machines,
        factory=factory,
        subscribers={
            events.SALE: handlers.SaleHandler(machines, factory),
            events.REFILL: handlers.RefillHandler(machines, factory),
            events.LOW_STOCK: handlers.LowStockWarningHandler(
                machines, notifications_adapter, factory
            ),
            events.STOCK_OK: handlers.StockOkHandler(
                machines, notifications_adapter, factory
            ),
        },
    )
    if subscribe_defaults:
        app.subscribe_defaults()
    return app
