"""
Point d'entrée en ligne de commande : simulation aléatoire.

Déroulé :
1. Abonnement des quatre handlers
2. Publication de N events aléatoires (et de leurs suites)
3. Désabonnement du handler des ventes
4. Publication de N nouveaux events aléatoires : les ventes n'ont plus d'effet
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import Optional, Sequence

from vending import config
from vending.adapters.generator import RandomEventGenerator
from vending.domain import events
from vending.service_layer import bootstrap
from vending.views import views

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Simulation de stock de distributeurs automatiques",
    )
    parser.add_argument(
        "--events",
        type=int,
        default=5,
        help="Nombre d'events aléatoires par phase",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Graine du générateur aléatoire, pour rejouer une simulation",
    )
    parser.add_argument(
        "--max-publishes",
        type=int,
        default=None,
        help="Nombre maximal de publications par phase",
    )
    parser.add_argument(
        "--skip-unknown-machines",
        action="store_true",
        help="Ignorer les events visant un distributeur inconnu au lieu d'arrêter",
    )
    return parser


def run_simulation(
    app: bootstrap.VendingApp,
    generator: RandomEventGenerator,
    count: int,
    max_publishes: Optional[int] = None,
    skip_unknown_machines: bool = False,
) -> list[events.Event]:
    """Joue les deux phases de la simulation et retourne les events publiés."""
    driver = app.make_driver(
        max_publishes=max_publishes, skip_unknown_machines=skip_unknown_machines,
    )

    logger.info("Publication de %d events", count)
    published = driver.run(generator.generate(count))
    _log_stock_levels(app)

    logger.info("Désabonnement du handler des ventes")
    app.bus.unsubscribe(events.SALE, app.subscribers[events.SALE])

    logger.info("Publication de %d events", count)
    published += driver.run(generator.generate(count))
    _log_stock_levels(app)
    return published


def _log_stock_levels(app: bootstrap.VendingApp) -> None:
    for row in views.stock_levels(app.machines):
        logger.info("%s : %d", row["machine_id"], row["stock_level"])


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=config.get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = bootstrap.bootstrap()
    generator = RandomEventGenerator(
        app.factory,
        [machine.id for machine in app.machines.list()],
        random.Random(args.seed),
    )
    run_simulation(
        app,
        generator,
        args.events,
        max_publishes=args.max_publishes,
        skip_unknown_machines=args.skip_unknown_machines,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
