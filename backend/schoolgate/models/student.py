"""Student model with QR badge code."""
import secrets
from schoolgate import db
from schoolgate.models.base import BaseModel

STUDENT_BADGE_PREFIX = 'ALUNO'
GUARDIAN_BADGE_PREFIX = 'PAI'

def generate_badge_code(prefix: str) -> str:
    """Generate a badge code such as ALUNO-48213."""
    return f"{prefix}-{secrets.randbelow(100000)}"

class Student(BaseModel):
    """Enrolled student. The class reference may be unassigned."""
    
    __tablename__ = 'students'
    
    name = db.Column(db.String(255), nullable=False)
    class_id = db.Column(db.Integer, db.ForeignKey('classes.id'), nullable=True)
    badge_code = db.Column(db.String(64), unique=True, nullable=False, index=True)
    
    # Relationships
    guardians = db.relationship('Guardian', backref='student', lazy='dynamic')
    access_records = db.relationship('AccessRecord', backref='student', lazy='dynamic')
    
    def to_dict(self):
        """Convert to dictionary."""
        return {
            'id': self.id,
            'name': self.name,
            'class_id': self.class_id,
            'class_name': self.school_class.name if self.school_class else None,
            'badge_code': self.badge_code,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }
    
    def __repr__(self):
        return f'<Student {self.name}>'
