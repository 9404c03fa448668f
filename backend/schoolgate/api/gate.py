# File: backend/schoolgate/api/gate.py
"""Front-desk API: badge scans, today's history and dashboard."""
from flask import Blueprint, request, current_app
from flask_jwt_extended import jwt_required
from sqlalchemy import func, distinct
from schoolgate import db
from schoolgate.models.access_record import AccessRecord, MovementKind, start_of_today
from schoolgate.models.student import Student
from schoolgate.services.pickup_service import PickupService
from schoolgate.utils.helpers import success_response, error_response, gate_error_response
from schoolgate.utils.decorators import staff_required
from schoolgate.utils.errors import SchoolGateError

gate_bp = Blueprint('gate', __name__)

@gate_bp.route('/scan', methods=['POST'])
def scan():
    """Resolve a scanned badge: student entry or guardian pickup request."""
    try:
        data = request.get_json(silent=True) or {}
        code = data.get('code', data.get('qr_code'))
        
        result = PickupService.scan(code)
        
        return success_response(data=result, message=result['message'])
        
    except SchoolGateError as e:
        if e.is_internal:
            current_app.logger.error(f"Scan processing error: {e.message}")
        return gate_error_response(e)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Scan processing error")
        return error_response("Internal server error", 500)

@gate_bp.route('/history', methods=['GET'])
def history():
    """Today's movements, newest first."""
    try:
        limit = current_app.config.get('HISTORY_LIMIT', 20)
        records = AccessRecord.query.filter(
            AccessRecord.recorded_at >= start_of_today()
        ).order_by(AccessRecord.recorded_at.desc(), AccessRecord.id.desc()).limit(limit).all()
        
        return success_response(data=[record.to_dict() for record in records])
        
    except Exception:
        current_app.logger.exception("Error fetching history")
        return error_response("Error fetching history", 500)

@gate_bp.route('/dashboard', methods=['GET'])
@jwt_required()
@staff_required
def dashboard():
    """Headcount for today."""
    try:
        today = start_of_today()
        total_students = Student.query.count()
        
        present_today = db.session.query(
            func.count(distinct(AccessRecord.student_id))
        ).filter(
            AccessRecord.movement == MovementKind.ENTRY,
            AccessRecord.recorded_at >= today
        ).scalar() or 0
        
        recent = AccessRecord.query.filter(
            AccessRecord.recorded_at >= today
        ).order_by(AccessRecord.recorded_at.desc(), AccessRecord.id.desc()).limit(
            current_app.config.get('DASHBOARD_RECENT_LIMIT', 5)
        ).all()
        
        return success_response(data={
            'total_students': total_students,
            'present_today': present_today,
            'absent_today': total_students - present_today,
            'recent_movements': [record.to_dict() for record in recent]
        })
        
    except Exception:
        current_app.logger.exception("Dashboard error")
        return error_response("Error loading dashboard", 500)
