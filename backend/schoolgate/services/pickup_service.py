# backend/schoolgate/services/pickup_service.py
"""Front-desk scan handling and the pickup authorization handshake.

A student badge records an ENTRY straight away. A guardian badge opens a
release request in the student's class room; the teacher answers with a
``release-decision`` event and only an approval ("liberado") writes an
EXIT record. Every decision is echoed to the front-desk room.
"""
import logging
import threading
from dataclasses import dataclass, asdict
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from schoolgate import db, socketio
from schoolgate.models.access_record import AccessRecord, MovementKind
from schoolgate.models.student import Student
from schoolgate.services.badge_service import BadgeService, BadgeKind
from schoolgate.services.realtime_service import (
    RealtimeService, EVENT_CLASS_UPDATE, EVENT_RELEASE_REQUEST, EVENT_RELEASE_OUTCOME
)
from schoolgate.utils.errors import NotFoundError, PersistenceError, ValidationError
from schoolgate.utils.validators import Validator

logger = logging.getLogger(__name__)

RELEASE_APPROVED = 'liberado'
RELEASE_EXPIRED = 'expirado'
RELEASE_CANCELLED = 'cancelado'

@dataclass
class PendingRelease:
    """A guardian waiting at the front desk for a teacher decision."""
    student_id: int
    student_name: str
    guardian_name: str
    class_id: Optional[int]
    requested_at: datetime
    expires_at: datetime

    def to_dict(self) -> Dict:
        data = asdict(self)
        data['requested_at'] = self.requested_at.isoformat()
        data['expires_at'] = self.expires_at.isoformat()
        return data

class PendingReleaseRegistry:
    """In-memory pending releases keyed by student id, with expiry.

    Expired entries are purged on every access and by the background
    sweeper in between, then handed to ``on_expire`` one by one.
    """

    def __init__(self, ttl_seconds: int,
                 on_expire: Callable[[PendingRelease], None] = None,
                 clock: Callable[[], datetime] = datetime.utcnow):
        self.ttl = timedelta(seconds=ttl_seconds)
        self.on_expire = on_expire
        self.clock = clock
        self._entries: Dict[int, PendingRelease] = {}
        self._lock = threading.Lock()

    def _purge_expired(self) -> List[PendingRelease]:
        now = self.clock()
        with self._lock:
            expired = [entry for entry in self._entries.values() if entry.expires_at <= now]
            for entry in expired:
                del self._entries[entry.student_id]

        for entry in expired:
            logger.info("Release request for student %s expired", entry.student_id)
            if self.on_expire:
                self.on_expire(entry)
        return expired

    def register(self, student_id: int, student_name: str, guardian_name: str,
                 class_id: Optional[int]) -> PendingRelease:
        """Open (or refresh) the pending release of a student."""
        self._purge_expired()
        now = self.clock()
        entry = PendingRelease(
            student_id=student_id,
            student_name=student_name,
            guardian_name=guardian_name,
            class_id=class_id,
            requested_at=now,
            expires_at=now + self.ttl
        )
        with self._lock:
            self._entries[student_id] = entry
        return entry

    def get(self, student_id: int) -> Optional[PendingRelease]:
        self._purge_expired()
        with self._lock:
            return self._entries.get(student_id)

    def remove(self, student_id: int) -> Optional[PendingRelease]:
        self._purge_expired()
        with self._lock:
            return self._entries.pop(student_id, None)

    def sweep(self) -> List[PendingRelease]:
        """Expire overdue entries now, without any other registry access."""
        return self._purge_expired()

    def list(self) -> List[PendingRelease]:
        self._purge_expired()
        with self._lock:
            return sorted(self._entries.values(), key=lambda entry: entry.requested_at)

    def __len__(self) -> int:
        return len(self.list())

def publish_expired(entry: PendingRelease) -> None:
    """Tell the front desk that nobody answered a release request."""
    RealtimeService.notify_front_desk(EVENT_RELEASE_OUTCOME, {
        'student_id': entry.student_id,
        'student_name': entry.student_name,
        'guardian_name': entry.guardian_name,
        'status': RELEASE_EXPIRED,
        'ok': False
    })

def run_release_sweeper(registry: PendingReleaseRegistry, interval: float,
                        sleep: Callable[[float], None] = None) -> None:
    """Background loop that expires pending releases every ``interval`` seconds."""
    sleep = sleep or socketio.sleep
    logger.info("Pending release sweeper started (every %ss)", interval)
    while True:
        sleep(interval)
        try:
            registry.sweep()
        except Exception:
            logger.exception("Pending release sweep failed")

def get_pending_releases() -> PendingReleaseRegistry:
    """Registry attached to the running application."""
    return current_app.extensions['pending_releases']

class PickupService:
    """Scan handling and teacher decisions."""

    @staticmethod
    def scan(code: str) -> Dict:
        """Process a front-desk scan and return the kiosk response data."""
        resolution = BadgeService.resolve(code)

        if resolution.kind is BadgeKind.STUDENT:
            return PickupService._record_entry(resolution.student)

        if resolution.kind is BadgeKind.GUARDIAN:
            return PickupService._request_release(resolution.student, resolution.guardian)

        raise NotFoundError("QR code is invalid or not registered")

    @staticmethod
    def _record_entry(student: Student) -> Dict:
        try:
            record = AccessRecord.append(student.id, MovementKind.ENTRY)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.exception("Could not record entry of student %s", student.id)
            raise PersistenceError("Could not record entry") from e

        timestamp = record.recorded_at.isoformat()
        RealtimeService.notify_class(student.class_id, EVENT_CLASS_UPDATE, {
            'kind': MovementKind.ENTRY.name,
            'student': {'id': student.id, 'name': student.name},
            'timestamp': timestamp
        })
        logger.info("Student %s entered", student.id)

        return {
            'outcome': 'entry',
            'tipo': 'entrada',
            'aluno': student.name,
            'student_id': student.id,
            'class_id': student.class_id,
            'timestamp': timestamp,
            'message': f"{student.name} entered the school."
        }

    @staticmethod
    def _request_release(student: Student, guardian) -> Dict:
        get_pending_releases().register(
            student_id=student.id,
            student_name=student.name,
            guardian_name=guardian.name,
            class_id=student.class_id
        )
        RealtimeService.notify_class(student.class_id, EVENT_RELEASE_REQUEST, {
            'student_id': student.id,
            'student_name': student.name,
            'guardian_name': guardian.name
        })
        logger.info("Guardian %s requested release of student %s", guardian.id, student.id)

        return {
            'outcome': 'awaiting',
            'tipo': 'aguardando',
            'aluno': student.name,
            'student_id': student.id,
            'class_id': student.class_id,
            'responsavel': guardian.name,
            'guardian_name': guardian.name,
            'message': f"{guardian.name} arrived. Waiting for the teacher to release {student.name}..."
        }

    @staticmethod
    def decide(data: Dict) -> Dict:
        """
        Apply a teacher decision and echo it to the front desk.

        Returns the published outcome. Any status other than "liberado"
        is echoed to the front desk as given. On approval the EXIT record
        is committed before anything is published; if that fails the
        front desk still receives an outcome with ``ok: False``.
        """
        if not isinstance(data, dict):
            raise ValidationError("Decision must be an object")

        outcome = dict(data)

        if data.get('status') != RELEASE_APPROVED:
            # Held: the guardian is asked to wait, nothing is written.
            outcome['ok'] = True
            logger.info("Release of student %s held (%s)", data.get('student_id'), data.get('status'))
            RealtimeService.notify_front_desk(EVENT_RELEASE_OUTCOME, outcome)
            return outcome

        student_id = Validator.parse_id(data.get('student_id'), 'student_id')
        outcome['student_id'] = student_id

        try:
            outcome['duplicate'] = PickupService._record_exit(student_id)
        except NotFoundError:
            outcome.update(ok=False, error='not_found')
            RealtimeService.notify_front_desk(EVENT_RELEASE_OUTCOME, outcome)
            raise
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.exception("Could not record exit of student %s", student_id)
            outcome.update(ok=False, error='persistence')
            RealtimeService.notify_front_desk(EVENT_RELEASE_OUTCOME, outcome)
            raise PersistenceError("Could not record exit") from e

        get_pending_releases().remove(student_id)
        outcome['ok'] = True
        logger.info("Student %s released", student_id)
        RealtimeService.notify_front_desk(EVENT_RELEASE_OUTCOME, outcome)
        return outcome

    @staticmethod
    def _record_exit(student_id: int) -> bool:
        """Append the EXIT record. Returns True when it was a duplicate."""
        student = Student.get_by_id(student_id)
        if student is None:
            raise NotFoundError(f"Student {student_id} not found")

        latest = AccessRecord.latest_today(student_id)
        if latest is not None and latest.movement is MovementKind.EXIT:
            logger.warning("Ignoring duplicate release of student %s", student_id)
            return True

        AccessRecord.append(student_id, MovementKind.EXIT)
        db.session.commit()
        return False

    @staticmethod
    def cancel(student_id: int) -> PendingRelease:
        """Drop a pending release and tell the front desk."""
        entry = get_pending_releases().remove(student_id)
        if entry is None:
            raise NotFoundError(f"No pending release for student {student_id}")

        RealtimeService.notify_front_desk(EVENT_RELEASE_OUTCOME, {
            'student_id': entry.student_id,
            'student_name': entry.student_name,
            'guardian_name': entry.guardian_name,
            'status': RELEASE_CANCELLED,
            'ok': False
        })
        logger.info("Release request for student %s cancelled", student_id)
        return entry
