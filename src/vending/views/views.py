"""
Views (lecture) des niveaux de stock.

Fonctions de lecture pure : elles ne modifient jamais le registre
et ne passent pas par le bus.
"""

from __future__ import annotations

from typing import Optional

from vending.adapters.repository import AbstractMachineRegistry
from vending.domain import model


def _as_dict(machine: model.Machine) -> dict:
    return {
        "machine_id": machine.id,
        "stock_level": machine.stock_level,
        "low_stock": machine.is_low_stock,
    }


def stock_levels(machines: AbstractMachineRegistry) -> list[dict]:
    """Retourne le stock de chaque distributeur, dans l'ordre du registre."""
    return [_as_dict(machine) for machine in machines.list()]


def stock_level(machine_id: str, machines: AbstractMachineRegistry) -> Optional[dict]:
    machine = machines.find_by_id(machine_id)
    if machine is None:
        return None
    return _as_dict(machine)
