"""
Point d'entrée Flask.

L'API Flask est un thin adapter : elle convertit les requêtes HTTP
en events, les passe au driver (qui publie aussi les events de suite),
et convertit les résultats en réponses HTTP.

L'API ne contient aucune logique métier.
"""

from __future__ import annotations

from flask import Flask, jsonify, request

from vending.domain import events
from vending.service_layer import bootstrap, handlers
from vending.views import views


app = Flask(__name__)
vending = bootstrap.bootstrap()


def _publish(event: events.Event):
    try:
        published = vending.make_driver().run([event])
    except handlers.UnknownMachine as e:
        return jsonify({"message": str(e)}), 400

    return jsonify({
        "events": [published_event.as_dict() for published_event in published],
        "machine": views.stock_level(event.machine_id, vending.machines),
    }), 201


@app.route("/sale", methods=["POST"])
def sale_endpoint():
    """
    POST /sale
    Body JSON : { machine_id, quantity }

    Enregistre une vente. La réponse liste l'event publié et ses suites.
    """
    data = request.json
    return _publish(vending.factory.sale(data["quantity"], data["machine_id"]))


@app.route("/refill", methods=["POST"])
def refill_endpoint():
    """
    POST /refill
    Body JSON : { machine_id, quantity }
    """
    data = request.json
    return _publish(vending.factory.refill(data["quantity"], data["machine_id"]))


@app.route("/machines", methods=["GET"])
def machines_view_endpoint():
    return jsonify(views.stock_levels(vending.machines)), 200


@app.route("/machines/<machine_id>", methods=["GET"])
def machine_view_endpoint(machine_id: str):
    result = views.stock_level(machine_id, vending.machines)
    if result is None:
        return "not found", 404
    return jsonify(result), 200
