"""
Configuration de l'application.

Toutes les valeurs sont lues dans l'environnement, avec des valeurs
par défaut adaptées à la simulation (trois distributeurs à 10 unités).
"""

from __future__ import annotations

import os


def get_machine_ids() -> list[str]:
    raw = os.environ.get("VENDING_MACHINE_IDS", "001,002,003")
    return [machine_id.strip() for machine_id in raw.split(",") if machine_id.strip()]


def get_initial_stock_level() -> int:
    return int(os.environ.get("VENDING_INITIAL_STOCK", "10"))


def get_max_publishes() -> int:
    """Nombre maximal de publications par exécution du driver."""
    return int(os.environ.get("VENDING_MAX_PUBLISHES", "1000"))


def get_log_level() -> str:
    return os.environ.get("VENDING_LOG_LEVEL", "INFO").upper()
