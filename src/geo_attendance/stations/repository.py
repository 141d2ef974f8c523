from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import WorkStation


class WorkStationRepository(Protocol):
    def list_all(self) -> Sequence[WorkStation]:
        raise NotImplementedError

    def get_by_id(self, station_id: int) -> Optional[WorkStation]:
        raise NotImplementedError

    def create(self, *, name: str, latitude: float, longitude: float) -> int:
        raise NotImplementedError

    def update(self, *, station_id: int, name: str, latitude: float, longitude: float) -> bool:
        raise NotImplementedError

    def delete(self, station_id: int) -> bool:
        """Delete a station; assigned employees keep no station afterwards."""

        raise NotImplementedError
