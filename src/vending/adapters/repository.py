"""
Pattern Repository pour les distributeurs.

Le registre des distributeurs expose une interface de type collection
(add, find_by_id, list). Il ne possède qu'un état en mémoire : la liste
des machines est partagée par référence entre tous les handlers du bus,
qui la modifient en place.
"""

from __future__ import annotations

import abc
from typing import Iterable, Optional

from vending.domain import model


class AbstractMachineRegistry(abc.ABC):
    """
    Interface abstraite du registre.

    Les méthodes publiques délèguent aux méthodes abstraites préfixées _
    que les sous-classes implémentent (Template Method).
    """

    def add(self, machine: model.Machine) -> None:
        self._add(machine)

    def find_by_id(self, machine_id: str) -> Optional[model.Machine]:
        """Retourne le distributeur d'id donné, ou None s'il est inconnu."""
        return self._find_by_id(machine_id)

    def list(self) -> list[model.Machine]:
        return self._list()

    @abc.abstractmethod
    def _add(self, machine: model.Machine) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def _find_by_id(self, machine_id: str) -> Optional[model.Machine]:
        raise NotImplementedError

    @abc.abstractmethod
    def _list(self) -> list[model.Machine]:
        raise NotImplementedError


class MachineRegistry(AbstractMachineRegistry):
    """Registre en mémoire, dans l'ordre d'ajout des distributeurs."""

    def __init__(self, machines: Optional[list[model.Machine]] = None):
        self._machines: list[model.Machine] = machines if machines is not None else []

    @classmethod
    def with_machines(
        cls,
        machine_ids: Iterable[str],
        stock_level: int = model.INITIAL_STOCK_LEVEL,
    ) -> MachineRegistry:
        return cls([model.Machine(machine_id, stock_level) for machine_id in machine_ids])

    def _add(self, machine: model.Machine) -> None:
        self._machines.append(machine)

    def _find_by_id(self, machine_id: str) -> Optional[model.Machine]:
        return next((m for m in self._machines if m.id == machine_id), None)

    def _list(self) -> list[model.Machine]:
        return list(self._machines)
