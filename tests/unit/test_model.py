"""
Tests unitaires du modèle de domaine et des events.

Aucun bus ici : on teste Machine, le registre et la fabrique d'events
en isolation.
"""

import dataclasses

import pytest

from vending.adapters.repository import MachineRegistry
from vending.domain import events
from vending.domain.model import INITIAL_STOCK_LEVEL, Machine


class TestMachine:
    def test_stock_initial_de_10(self):
        assert Machine("001").stock_level == INITIAL_STOCK_LEVEL == 10

    def test_vendre_décrémente_le_stock(self):
        machine = Machine("001")
        assert machine.sell(2) == 8
        assert machine.stock_level == 8

    def test_le_stock_peut_devenir_négatif(self):
        machine = Machine("001", stock_level=1)
        machine.sell(2)
        assert machine.stock_level == -1

    def test_réapprovisionner_incrémente_le_stock(self):
        machine = Machine("001", stock_level=2)
        assert machine.refill(5) == 7

    @pytest.mark.parametrize("niveau, bas", [(2, True), (3, False), (-1, True)])
    def test_stock_bas_strictement_sous_le_seuil(self, niveau, bas):
        assert Machine("001", stock_level=niveau).is_low_stock is bas

    def test_id_non_modifiable(self):
        machine = Machine("001")
        with pytest.raises(AttributeError):
            machine.id = "002"

    def test_égalité_basée_sur_l_id(self):
        assert Machine("001", 10) == Machine("001", 2)
        assert Machine("001") != Machine("002")


class TestMachineRegistry:
    def test_tous_les_distributeurs_démarrent_à_10(self):
        registre = MachineRegistry.with_machines(["001", "002", "003"])
        assert [m.stock_level for m in registre.list()] == [10, 10, 10]

    def test_find_by_id_retourne_la_même_instance(self):
        registre = MachineRegistry.with_machines(["001"])
        assert registre.find_by_id("001") is registre.find_by_id("001")

    def test_find_by_id_retourne_none_si_inconnu(self):
        registre = MachineRegistry.with_machines(["001"])
        assert registre.find_by_id("999") is None

    def test_add(self):
        registre = MachineRegistry()
        registre.add(Machine("042"))
        assert [m.id for m in registre.list()] == ["042"]


class TestEvents:
    def test_types(self):
        assert events.MachineSaleEvent(1, "001").type == "sale"
        assert events.MachineRefillEvent(3, "001").type == "refill"
        assert events.LowStockWarningEvent(2, "001").type == "low-stock"
        assert events.StockOkEvent(7, "001").type == "stock-ok"

    def test_events_immuables(self):
        event = events.MachineSaleEvent(1, "001")
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.sold_quantity = 5

    def test_pas_de_validation_des_quantités(self):
        assert events.MachineSaleEvent(-4, "001").sold_quantity == -4
        assert events.MachineRefillEvent(0, "001").refill_quantity == 0

    def test_as_dict(self):
        assert events.LowStockWarningEvent(2, "001").as_dict() == {
            "type": "low-stock",
            "stock_level": 2,
            "machine_id": "001",
        }


class TestEventFactory:
    def test_l_observateur_voit_chaque_création(self):
        créés = []
        factory = events.EventFactory(on_created=créés.append)

        vente = factory.sale(2, "001")
        réappro = factory.refill(5, "002")
        alerte = factory.low_stock(1, "001")
        ok = factory.stock_ok(7, "002")

        assert créés == [vente, réappro, alerte, ok]
        assert vente == events.MachineSaleEvent(2, "001")
        assert ok == events.StockOkEvent(7, "002")

    def test_observateur_par_défaut_logge_en_debug(self, caplog):
        caplog.set_level("DEBUG", logger="vending.domain.events")
        events.EventFactory().sale(2, "003")
        assert "MachineSaleEvent" in caplog.text
        assert "003" in caplog.text
