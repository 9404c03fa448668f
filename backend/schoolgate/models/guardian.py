"""Guardian model. Each guardian points at exactly one student."""
from schoolgate import db
from schoolgate.models.base import BaseModel

class Guardian(BaseModel):
    """Person allowed to pick a student up."""
    
    __tablename__ = 'guardians'
    
    name = db.Column(db.String(255), nullable=False)
    kinship = db.Column(db.String(50), nullable=False, default='Responsável')
    phone = db.Column(db.String(30), nullable=True)
    badge_code = db.Column(db.String(64), unique=True, nullable=False, index=True)
    student_id = db.Column(db.Integer, db.ForeignKey('students.id'), nullable=False)
    
    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'kinship': self.kinship,
            'phone': self.phone,
            'badge_code': self.badge_code,
            'student_id': self.student_id
        }
    
    def __repr__(self):
        return f'<Guardian {self.name}>'
