from __future__ import annotations

import logging
from typing import Any

from ..common.validators import require_latitude, require_longitude, require_non_empty
from ..core.exceptions import NotFound, ValidationError
from ..employees.service import SessionContext, require_admin
from .model import WorkStation
from .repository import WorkStationRepository

logger = logging.getLogger(__name__)


class WorkStationService:
    """Use case: manage work sites (admin).

    Employees reference stations by id only, so moving a station takes effect for
    every assigned employee on the next read.
    """

    def __init__(self, stations: WorkStationRepository):
        self._stations = stations

    def list_stations(self):
        return list(self._stations.list_all())

    def get(self, station_id: int) -> WorkStation:
        station = self._stations.get_by_id(int(station_id))
        if not station:
            raise NotFound("Work station not found")
        return station

    def create(self, session: SessionContext, *, name: str, latitude: Any, longitude: Any) -> int:
        require_admin(session)
        name = require_non_empty(name, "Station name")
        station_id = self._stations.create(
            name=name,
            latitude=require_latitude(latitude),
            longitude=require_longitude(longitude),
        )
        logger.info("Work station %s (%s) created", station_id, name)
        return station_id

    def update(self, session: SessionContext, *, station_id: int, name: str, latitude: Any, longitude: Any) -> WorkStation:
        require_admin(session)
        self.get(station_id)
        name = require_non_empty(name, "Station name")
        if not self._stations.update(
            station_id=int(station_id),
            name=name,
            latitude=require_latitude(latitude),
            longitude=require_longitude(longitude),
        ):
            raise ValidationError("Updating work station failed")
        return self.get(station_id)

    def delete(self, session: SessionContext, *, station_id: int) -> None:
        require_admin(session)
        self.get(station_id)
        if not self._stations.delete(int(station_id)):
            raise ValidationError("Deleting work station failed")
        logger.info("Work station %s deleted", station_id)
