from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.enums import CaptureAction
from ..core.exceptions import ValidationError
from ..employees.service import SessionContext
from ..geo.provider import LocationOptions, LocationProvider
from ..storage.photo_store import PhotoStore, selfie_path
from .model import AttendanceRecord
from .service import AttendanceService
from .state import require_can_check_in, require_open

logger = logging.getLogger(__name__)


class CaptureService:
    """Use case: geotagged selfie check-in/check-out.

    Order matters: the GPS fix is taken first (no fix blocks the action), then the
    selfie is uploaded, then the record is written in one call. An upload whose
    record write fails afterwards leaves an orphan photo, nothing else.
    """

    def __init__(
        self,
        attendance: AttendanceService,
        photos: PhotoStore,
        *,
        location_options: Optional[LocationOptions] = None,
    ):
        self._attendance = attendance
        self._photos = photos
        self._options = location_options or LocationOptions()

    def capture_check_in(
        self,
        session: SessionContext,
        *,
        locator: LocationProvider,
        photo: bytes,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        now = now or now_local()
        require_can_check_in(self._attendance.get_today_record(session.employee_id, now.date()))

        location = locator.get_current_location(self._options)
        photo_ref = self._upload(session, CaptureAction.CHECK_IN, photo, now)
        return self._attendance.check_in(session.employee_id, location=location, photo_ref=photo_ref, now=now)

    def capture_check_out(
        self,
        session: SessionContext,
        *,
        locator: LocationProvider,
        photo: bytes,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        now = now or now_local()
        require_open(self._attendance.get_today_record(session.employee_id, now.date()))

        location = locator.get_current_location(self._options)
        photo_ref = self._upload(session, CaptureAction.CHECK_OUT, photo, now)
        return self._attendance.check_out(session.employee_id, location=location, photo_ref=photo_ref, now=now)

    def _upload(self, session: SessionContext, action: CaptureAction, photo: bytes, now: datetime) -> str:
        if not photo:
            raise ValidationError("A selfie is required")
        path = selfie_path(session.employee_id, action, now)
        url = self._photos.upload(path, photo)
        logger.debug("Uploaded %s selfie to %s", action.value, path)
        return url
