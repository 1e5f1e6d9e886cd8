"""
Modèle de domaine des distributeurs automatiques.

Un distributeur (Machine) est une entité : il a une identité stable
(son id) et un niveau de stock qui évolue au fil des ventes et des
réapprovisionnements. Le niveau de stock est le seul état partagé
entre les handlers du bus.
"""

from __future__ import annotations

INITIAL_STOCK_LEVEL = 10
LOW_STOCK_THRESHOLD = 3


class Machine:
    """
    Entité représentant un distributeur.

    L'égalité et le hash sont basés sur l'id, pas sur le niveau de stock.
    Le niveau n'est jamais borné : une vente peut le rendre négatif.
    """

    def __init__(self, machine_id: str, stock_level: int = INITIAL_STOCK_LEVEL):
        self._id = machine_id
        self.stock_level = stock_level

    @property
    def id(self) -> str:
        return self._id

    def __repr__(self) -> str:
        return f"<Machine {self._id} stock={self.stock_level}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Machine):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    @property
    def is_low_stock(self) -> bool:
        """Vrai si le stock est strictement sous le seuil d'alerte."""
        return self.stock_level < LOW_STOCK_THRESHOLD

    def sell(self, quantity: int) -> int:
        """Retire `quantity` articles du stock et retourne le nouveau niveau."""
        self.stock_level -= quantity
        return self.stock_level

    def refill(self, quantity: int) -> int:
        """Ajoute `quantity` articles au stock et retourne le nouveau niveau."""
        self.stock_level += quantity
        return self.stock_level
