from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required
from ..container import Container
from .model import WorkStation


def station_to_dict(station: WorkStation) -> dict:
    return {
        "id": station.station_id,
        "name": station.name,
        "latitude": station.latitude,
        "longitude": station.longitude,
        "maps_link": station.location.maps_link(),
    }


def register(app: Flask, container: Container) -> None:
    def payload() -> dict:
        return request.get_json(silent=True) or request.form.to_dict()

    @app.route("/admin/work-stations", methods=["GET"], endpoint="admin_stations")
    @admin_required
    def list_stations(ctx):
        stations = container.station_service.list_stations()
        return jsonify({"success": True, "stations": [station_to_dict(s) for s in stations]})

    @app.route("/admin/work-stations", methods=["POST"], endpoint="admin_create_station")
    @admin_required
    def create_station(ctx):
        data = payload()
        station_id = container.station_service.create(
            ctx,
            name=data.get("name", ""),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
        )
        station = container.station_service.get(station_id)
        return jsonify({"success": True, "station": station_to_dict(station)}), 201

    @app.route("/admin/work-stations/<int:station_id>", methods=["PUT"], endpoint="admin_update_station")
    @admin_required
    def update_station(ctx, station_id: int):
        data = payload()
        station = container.station_service.update(
            ctx,
            station_id=station_id,
            name=data.get("name", ""),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
        )
        return jsonify({"success": True, "station": station_to_dict(station)})

    @app.route("/admin/work-stations/<int:station_id>", methods=["DELETE"], endpoint="admin_delete_station")
    @admin_required
    def delete_station(ctx, station_id: int):
        container.station_service.delete(ctx, station_id=station_id)
        return jsonify({"success": True})
