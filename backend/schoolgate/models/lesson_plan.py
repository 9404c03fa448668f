"""Daily lesson plan / agenda entry."""
from schoolgate import db
from schoolgate.models.base import BaseModel

class LessonPlan(BaseModel):
    """One submission per row; several rows per class and date are allowed."""
    
    __tablename__ = 'lesson_plans'
    
    class_id = db.Column(db.Integer, db.ForeignKey('classes.id'), nullable=False)
    plan_date = db.Column(db.Date, nullable=False)
    plan = db.Column(db.Text, nullable=True)
    activity = db.Column(db.Text, nullable=True)
    homework = db.Column(db.Text, nullable=True)
    note = db.Column(db.Text, nullable=True)
    
    def to_dict(self):
        data = super().to_dict()
        data['plan_date'] = self.plan_date.isoformat()
        data['class_name'] = self.school_class.name if self.school_class else None
        teacher = self.school_class.teacher if self.school_class else None
        data['teacher_name'] = teacher.name if teacher else None
        return data
