"""Models package with all models."""
from .base import BaseModel
from .user import User, UserRole
from .school_class import SchoolClass
from .student import Student, generate_badge_code, STUDENT_BADGE_PREFIX, GUARDIAN_BADGE_PREFIX
from .guardian import Guardian
from .access_record import AccessRecord, MovementKind
from .lesson_plan import LessonPlan

__all__ = [
    'BaseModel', 'User', 'UserRole', 'SchoolClass',
    'Student', 'generate_badge_code', 'STUDENT_BADGE_PREFIX', 'GUARDIAN_BADGE_PREFIX',
    'Guardian', 'AccessRecord', 'MovementKind', 'LessonPlan'
]
