"""
Tests d'intégration : bootstrap réel et simulation complète.

Ces tests utilisent la configuration (variables d'environnement) et
les adapters de production, sans aucun fake.
"""

from vending.domain import events
from vending.entrypoints import cli
from vending.service_layer import bootstrap


class ScriptedGenerator:
    """Rejoue des lots d'events prédéfinis, un lot par appel à generate."""

    def __init__(self, *batches):
        self.batches = list(batches)

    def generate(self, count):
        return self.batches.pop(0)


class TestBootstrap:
    def test_configuration_par_défaut(self):
        app = bootstrap.bootstrap()

        assert [(m.id, m.stock_level) for m in app.machines.list()] == [
            ("001", 10), ("002", 10), ("003", 10),
        ]
        for event_type in ("sale", "refill", "low-stock", "stock-ok"):
            assert app.bus.subscribers_for(event_type) == [app.subscribers[event_type]]

    def test_configuration_par_l_environnement(self, monkeypatch):
        monkeypatch.setenv("VENDING_MACHINE_IDS", "A, B")
        monkeypatch.setenv("VENDING_INITIAL_STOCK", "4")

        app = bootstrap.bootstrap()

        assert [(m.id, m.stock_level) for m in app.machines.list()] == [("A", 4), ("B", 4)]

    def test_sans_abonnements(self):
        app = bootstrap.bootstrap(subscribe_defaults=False)
        assert app.bus.publish(events.MachineSaleEvent(1, "001")) is None

    def test_les_handlers_partagent_le_registre(self):
        app = bootstrap.bootstrap()
        assert all(h.machines is app.machines for h in app.subscribers.values())


class TestSimulation:
    def test_les_ventes_sont_ignorées_après_désabonnement(self):
        app = bootstrap.bootstrap()
        generator = ScriptedGenerator(
            [events.MachineSaleEvent(8, "001"), events.MachineRefillEvent(3, "002")],
            [events.MachineSaleEvent(2, "002"), events.MachineRefillEvent(5, "001")],
        )

        publiés = cli.run_simulation(app, generator, 2)

        assert [e.type for e in publiés] == [
            "sale", "refill", "low-stock", "stock-ok",
            "sale", "refill", "stock-ok",
        ]
        stocks = {m.id: m.stock_level for m in app.machines.list()}
        assert stocks == {"001": 7, "002": 13, "003": 10}
        assert app.bus.subscribers_for("sale") == []

    def test_main(self, caplog):
        caplog.set_level("INFO")

        assert cli.main(["--events", "5", "--seed", "3"]) == 0
        assert "Désabonnement du handler des ventes" in caplog.text
