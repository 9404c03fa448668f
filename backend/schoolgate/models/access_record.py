"""Entry/exit log."""
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional
from schoolgate import db
from schoolgate.models.base import BaseModel

class MovementKind(Enum):
    """Direction of a movement through the front desk."""
    ENTRY = 'ENTRADA'
    EXIT = 'SAIDA'

def start_of_today() -> datetime:
    """Midnight (UTC) of the current day."""
    now = datetime.utcnow()
    return datetime(now.year, now.month, now.day)

class AccessRecord(BaseModel):
    """Append-only attendance fact.
    
    ENTRY rows come straight from a student badge scan. EXIT rows are
    written only after a teacher approves a release.
    """
    
    __tablename__ = 'access_records'
    
    student_id = db.Column(db.Integer, db.ForeignKey('students.id'), nullable=False, index=True)
    movement = db.Column(db.Enum(MovementKind), nullable=False)
    recorded_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    
    @classmethod
    def append(cls, student_id: int, movement: MovementKind) -> 'AccessRecord':
        """Stage a new record in the session. The caller commits."""
        record = cls(student_id=student_id, movement=movement, recorded_at=datetime.utcnow())
        db.session.add(record)
        return record
    
    @classmethod
    def latest_today(cls, student_id: int) -> Optional['AccessRecord']:
        return cls.query.filter(
            cls.student_id == student_id,
            cls.recorded_at >= start_of_today()
        ).order_by(cls.recorded_at.desc(), cls.id.desc()).first()
    
    @classmethod
    def since(cls, days: int):
        """Query of records from the last ``days`` days, newest first."""
        cutoff = start_of_today() - timedelta(days=days)
        return cls.query.filter(cls.recorded_at >= cutoff).order_by(cls.recorded_at.desc())
    
    def update(self, **kwargs):
        raise TypeError('Access records are append-only')
    
    def delete(self):
        raise TypeError('Access records are append-only')
    
    def to_dict(self):
        return {
            'id': self.id,
            'student_id': self.student_id,
            'student_name': self.student.name if self.student else None,
            'movement': self.movement.value,
            'recorded_at': self.recorded_at.isoformat()
        }
    
    def __repr__(self):
        return f'<AccessRecord {self.student_id}-{self.movement.value}>'
