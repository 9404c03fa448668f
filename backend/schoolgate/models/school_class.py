"""Class (turma) model."""
from schoolgate import db
from schoolgate.models.base import BaseModel

class SchoolClass(BaseModel):
    """A class group with at most one assigned teacher."""
    
    __tablename__ = 'classes'
    
    name = db.Column(db.String(100), nullable=False)
    teacher_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    
    students = db.relationship('Student', backref='school_class', lazy='dynamic')
    lesson_plans = db.relationship('LessonPlan', backref='school_class', lazy='dynamic')
    
    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'teacher_id': self.teacher_id,
            'teacher_name': self.teacher.name if self.teacher else None
        }
    
    def __repr__(self):
        return f'<SchoolClass {self.name}>'
