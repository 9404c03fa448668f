# File: backend/schoolgate/api/students.py
"""Student directory and enrollment API."""
from flask import Blueprint, request, current_app
from flask_jwt_extended import jwt_required
from schoolgate.models.student import Student
from schoolgate.models.school_class import SchoolClass
from schoolgate.services.student_service import StudentService
from schoolgate.services.qr_service import QRService
from schoolgate.utils.helpers import success_response, error_response
from schoolgate.utils.decorators import admin_required, staff_required
from schoolgate.utils.validators import Validator
from schoolgate.utils.errors import ValidationError

students_bp = Blueprint('students', __name__)

@students_bp.route('', methods=['GET'])
def get_students():
    """Every student with class, teacher and guardian."""
    try:
        return success_response(data=StudentService.directory())
        
    except Exception:
        current_app.logger.exception("Error fetching students")
        return error_response("Error fetching students", 500)

@students_bp.route('', methods=['POST'])
@jwt_required()
@admin_required
def enroll_student():
    """Enroll a student together with one guardian."""
    try:
        data = request.get_json(silent=True) or {}
        
        validation = Validator.validate_required_fields(data, ['student_name', 'guardian_name'])
        if not validation['is_valid']:
            return error_response(validation['errors'][0], 400)
        
        class_id = Validator.parse_optional_id(data.get('class_id'), 'class_id')
        if class_id is not None and SchoolClass.get_by_id(class_id) is None:
            return error_response(f"Class {class_id} not found", 404)
        
        result, error = StudentService.enroll(
            student_name=data['student_name'],
            guardian_name=data['guardian_name'],
            guardian_phone=data.get('guardian_phone'),
            class_id=class_id,
            kinship=data.get('kinship') or 'Responsável'
        )
        
        if error:
            return error_response(error, 500)
        
        return success_response(
            data=result,
            message="Student enrolled successfully"
        ), 201
        
    except ValidationError as e:
        return error_response(e.message, 400)
    except Exception:
        current_app.logger.exception("Error enrolling student")
        return error_response("Error enrolling student", 500)

@students_bp.route('/<int:student_id>/badges', methods=['GET'])
@jwt_required()
@staff_required
def get_badges(student_id):
    """QR images for the student badge and every guardian badge."""
    student = Student.get_or_404(student_id)
    
    try:
        guardians = [
            {
                'name': guardian.name,
                'badge_code': guardian.badge_code,
                'image': QRService.render_badge(guardian.badge_code)
            }
            for guardian in student.guardians
        ]
        
        return success_response(data={
            'student': {
                'name': student.name,
                'badge_code': student.badge_code,
                'image': QRService.render_badge(student.badge_code)
            },
            'guardians': guardians
        })
        
    except Exception:
        current_app.logger.exception(f"Error rendering badges of student {student_id}")
        return error_response("Error rendering badges", 500)
