# File: backend/schoolgate/api/teachers.py
"""Teachers API."""
from flask import Blueprint, request, current_app
from flask_jwt_extended import jwt_required
from schoolgate.models.user import User, UserRole
from schoolgate.services.auth_service import AuthService
from schoolgate.utils.helpers import success_response, error_response
from schoolgate.utils.decorators import admin_required
from schoolgate.utils.validators import Validator

teachers_bp = Blueprint('teachers', __name__)

@teachers_bp.route('', methods=['GET'])
def get_teachers():
    """List teachers for class assignment."""
    try:
        teachers = User.query.filter_by(role=UserRole.TEACHER).order_by(User.name.asc()).all()
        return success_response(
            data=[{'id': teacher.id, 'name': teacher.name} for teacher in teachers]
        )
        
    except Exception:
        current_app.logger.exception("Error fetching teachers")
        return error_response("Error fetching teachers", 500)

@teachers_bp.route('', methods=['POST'])
@jwt_required()
@admin_required
def create_teacher():
    """Create a teacher account."""
    try:
        data = request.get_json(silent=True) or {}
        
        validation = Validator.validate_required_fields(data, ['name', 'email', 'password'])
        if not validation['is_valid']:
            return error_response(validation['errors'][0], 400)
        
        teacher, error = AuthService.register(
            email=data['email'],
            password=data['password'],
            name=data['name'],
            role=UserRole.TEACHER
        )
        
        if error:
            return error_response(error, 400)
        
        current_app.logger.info(f"Teacher {teacher['id']} created")
        return success_response(
            data=teacher,
            message="Teacher created successfully"
        ), 201
        
    except Exception:
        current_app.logger.exception("Error creating teacher")
        return error_response("Error creating teacher", 500)
