# backend/schoolgate/services/student_service.py
"""Student enrollment service."""
import logging
from typing import Dict, Optional, Tuple
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from schoolgate import db
from schoolgate.models.student import (
    Student, generate_badge_code, STUDENT_BADGE_PREFIX, GUARDIAN_BADGE_PREFIX
)
from schoolgate.models.guardian import Guardian
from schoolgate.models.school_class import SchoolClass
from schoolgate.services.badge_service import BadgeService

logger = logging.getLogger(__name__)

class StudentService:
    """Service for managing students."""
    
    @staticmethod
    def new_badge_code(prefix: str, taken: set = None) -> str:
        """Generate a code that no student or guardian uses yet."""
        taken = taken or set()
        attempts = current_app.config.get('BADGE_CODE_ATTEMPTS', 10)
        for _ in range(attempts):
            code = generate_badge_code(prefix)
            if code not in taken and not BadgeService.code_in_use(code):
                return code
        raise RuntimeError(f"Could not generate a free {prefix} badge code")
    
    @staticmethod
    def enroll(
        student_name: str,
        guardian_name: str,
        guardian_phone: str = None,
        class_id: Optional[int] = None,
        kinship: str = 'Responsável'
    ) -> Tuple[Dict, Optional[str]]:
        """Create a student and the guardian in a single transaction."""
        if class_id is not None and db.session.get(SchoolClass, class_id) is None:
            return None, f"Class {class_id} not found"
        
        try:
            student_code = StudentService.new_badge_code(STUDENT_BADGE_PREFIX)
            guardian_code = StudentService.new_badge_code(GUARDIAN_BADGE_PREFIX, taken={student_code})
            
            student = Student(
                name=student_name.strip(),
                class_id=class_id,
                badge_code=student_code
            )
            db.session.add(student)
            db.session.flush()  # Get student.id
            
            guardian = Guardian(
                name=guardian_name.strip(),
                kinship=kinship,
                phone=guardian_phone,
                student_id=student.id,
                badge_code=guardian_code
            )
            db.session.add(guardian)
            db.session.commit()
            
        except (SQLAlchemyError, RuntimeError):
            db.session.rollback()
            logger.exception("Enrollment of %s failed", student_name)
            return None, "Error enrolling student"
        
        logger.info("Enrolled student %s with guardian %s", student.id, guardian.id)
        return {
            'student': student.to_dict(),
            'guardian': guardian.to_dict(),
            'qr_aluno': student_code,
            'qr_pai': guardian_code
        }, None
    
    @staticmethod
    def directory() -> list:
        """Every student with class, teacher and guardian, ordered by name."""
        students = Student.query.order_by(Student.name.asc()).all()
        rows = []
        for student in students:
            school_class = student.school_class
            teacher = school_class.teacher if school_class else None
            guardians = student.guardians.order_by(Guardian.id).all() or [None]
            for guardian in guardians:
                rows.append({
                    'id': student.id,
                    'name': student.name,
                    'class_name': school_class.name if school_class else 'Sem Turma',
                    'teacher_name': teacher.name if teacher else 'Sem Prof',
                    'qr_code': student.badge_code,
                    'guardian_name': guardian.name if guardian else None,
                    'guardian_qr_code': guardian.badge_code if guardian else None
                })
        return rows
