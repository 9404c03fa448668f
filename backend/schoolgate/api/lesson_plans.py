# File: backend/schoolgate/api/lesson_plans.py
"""Daily lesson plans (agenda)."""
from flask import Blueprint, request, current_app
from flask_jwt_extended import jwt_required
from schoolgate import db
from schoolgate.models.lesson_plan import LessonPlan
from schoolgate.models.school_class import SchoolClass
from schoolgate.services.realtime_service import RealtimeService, EVENT_PLAN_SAVED
from schoolgate.utils.helpers import success_response, error_response
from schoolgate.utils.decorators import staff_required
from schoolgate.utils.validators import Validator
from schoolgate.utils.errors import ValidationError

lesson_plans_bp = Blueprint('lesson_plans', __name__)

@lesson_plans_bp.route('', methods=['POST'])
@jwt_required()
@staff_required
def save_lesson_plan():
    """Store one lesson plan entry and notify every client."""
    try:
        data = request.get_json(silent=True) or {}
        
        class_id = Validator.parse_id(data.get('class_id'), 'class_id')
        plan_date = Validator.parse_date(data.get('plan_date'), 'plan_date')
        
        if SchoolClass.get_by_id(class_id) is None:
            return error_response(f"Class {class_id} not found", 404)
        
        lesson_plan = LessonPlan(
            class_id=class_id,
            plan_date=plan_date,
            plan=data.get('plan'),
            activity=data.get('activity'),
            homework=data.get('homework'),
            note=data.get('note')
        ).save()
        
        RealtimeService.broadcast(EVENT_PLAN_SAVED, {
            'message': 'Lesson plan saved!',
            'class_id': class_id,
            'plan_date': plan_date.isoformat()
        })
        
        return success_response(
            data=lesson_plan.to_dict(),
            message="Lesson plan saved successfully"
        ), 201
        
    except ValidationError as e:
        return error_response(e.message, 400)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error saving lesson plan")
        return error_response("Error saving lesson plan", 500)

@lesson_plans_bp.route('', methods=['GET'])
def get_lesson_plans():
    """Latest lesson plans for the school office."""
    try:
        lesson_plans = LessonPlan.query.join(SchoolClass).order_by(
            LessonPlan.plan_date.desc(),
            SchoolClass.name.asc()
        ).limit(current_app.config.get('LESSON_PLAN_LIMIT', 50)).all()
        
        return success_response(data=[lesson_plan.to_dict() for lesson_plan in lesson_plans])
        
    except Exception:
        current_app.logger.exception("Error fetching lesson plans")
        return error_response("Error fetching lesson plans", 500)
