"""
Configuration partagée pour les tests.

Fournit un registre de trois distributeurs à 10 unités et une
application assemblée avec des notifications en mémoire.
"""

import pytest

from vending.adapters.notifications import AbstractNotifications
from vending.adapters.repository import MachineRegistry
from vending.domain import events
from vending.service_layer import bootstrap


class FakeNotifications(AbstractNotifications):
    """Capture les alertes envoyées pour vérification dans les tests."""

    def __init__(self):
        self.envoyées = []

    def send(self, machine_id: str, message: str) -> None:
        self.envoyées.append((machine_id, message))


@pytest.fixture
def machines():
    return MachineRegistry.with_machines(["001", "002", "003"])


@pytest.fixture
def notifications():
    return FakeNotifications()


@pytest.fixture
def factory():
    return events.EventFactory()


@pytest.fixture
def app(machines, notifications, factory):
    return bootstrap.bootstrap(
        machines=machines,
        notifications_adapter=notifications,
        factory=factory,
    )


@pytest.fixture
def stock(machines):
    """Lecture rapide du stock : stock("001") -> int."""
    def _stock(machine_id):
        return machines.find_by_id(machine_id).stock_level
    return _stock
