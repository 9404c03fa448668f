"""Badge resolution: which identity does a scanned code denote?"""
import enum
from dataclasses import dataclass
from typing import Optional
from schoolgate.models.student import Student
from schoolgate.models.guardian import Guardian
from schoolgate.models.school_class import SchoolClass
from schoolgate.utils.errors import DataIntegrityError
from schoolgate.utils.validators import Validator

class BadgeKind(enum.Enum):
    """Resolution outcome."""
    STUDENT = 'student'
    GUARDIAN = 'guardian'
    NOT_FOUND = 'not_found'

@dataclass
class BadgeResolution:
    """Result of resolving a badge code."""
    kind: BadgeKind
    student: Optional[Student] = None
    guardian: Optional[Guardian] = None
    school_class: Optional[SchoolClass] = None

class BadgeService:
    """Pure lookups over the student and guardian badge namespaces."""
    
    @staticmethod
    def resolve(code: str) -> BadgeResolution:
        """
        Resolve a scanned code.
        
        Student badges are checked first; a guardian lookup only happens
        when no student carries the code. A guardian whose student is
        missing raises DataIntegrityError.
        """
        code = Validator.require_badge_code(code)
        
        student = Student.query.filter_by(badge_code=code).order_by(Student.id).first()
        if student:
            return BadgeResolution(
                kind=BadgeKind.STUDENT,
                student=student,
                school_class=student.school_class
            )
        
        guardian = Guardian.query.filter_by(badge_code=code).order_by(Guardian.id).first()
        if guardian:
            child = Student.get_by_id(guardian.student_id)
            if child is None:
                raise DataIntegrityError(
                    f"Guardian {guardian.id} is linked to missing student {guardian.student_id}"
                )
            return BadgeResolution(
                kind=BadgeKind.GUARDIAN,
                student=child,
                guardian=guardian,
                school_class=child.school_class
            )
        
        return BadgeResolution(kind=BadgeKind.NOT_FOUND)
    
    @staticmethod
    def code_in_use(code: str) -> bool:
        """True when either namespace already holds ``code``."""
        return (
            Student.query.filter_by(badge_code=code).first() is not None
            or Guardian.query.filter_by(badge_code=code).first() is not None
        )
