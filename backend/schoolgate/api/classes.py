# File: backend/schoolgate/api/classes.py
"""Classes API."""
from flask import Blueprint, request, current_app
from flask_jwt_extended import jwt_required
from schoolgate import db
from schoolgate.models.school_class import SchoolClass
from schoolgate.models.user import User
from schoolgate.utils.helpers import success_response, error_response
from schoolgate.utils.decorators import admin_required
from schoolgate.utils.validators import Validator
from schoolgate.utils.errors import ValidationError

classes_bp = Blueprint('classes', __name__)

@classes_bp.route('', methods=['GET'])
def get_classes():
    """List classes with their teacher."""
    try:
        classes = SchoolClass.query.order_by(SchoolClass.name.asc()).all()
        return success_response(data=[school_class.to_dict() for school_class in classes])
        
    except Exception:
        current_app.logger.exception("Error fetching classes")
        return error_response("Error fetching classes", 500)

@classes_bp.route('', methods=['POST'])
@jwt_required()
@admin_required
def create_class():
    """Create a class, optionally assigned to a teacher."""
    try:
        data = request.get_json(silent=True) or {}
        
        name = (data.get('name') or '').strip()
        if not name:
            return error_response("Missing required field: name", 400)
        
        teacher_id = Validator.parse_optional_id(data.get('teacher_id'), 'teacher_id')
        if teacher_id is not None:
            teacher = db.session.get(User, teacher_id)
            if not teacher or not teacher.is_teacher():
                return error_response(f"Teacher {teacher_id} not found", 404)
        
        school_class = SchoolClass(name=name, teacher_id=teacher_id).save()
        
        return success_response(
            data=school_class.to_dict(),
            message="Class created successfully"
        ), 201
        
    except ValidationError as e:
        return error_response(e.message, 400)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error creating class")
        return error_response("Error creating class", 500)
