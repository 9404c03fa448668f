# File: backend/schoolgate/api/reports.py
"""Attendance report over the recent window."""
from flask import Blueprint, request, current_app
from flask_jwt_extended import jwt_required
from schoolgate.models.access_record import AccessRecord
from schoolgate.utils.helpers import success_response, error_response
from schoolgate.utils.decorators import staff_required
import pandas as pd
import io

reports_bp = Blueprint('reports', __name__)

REPORT_COLUMNS = ['student', 'class', 'movement', 'recorded_at']

def attendance_rows(days: int) -> list:
    """Movements of the last ``days`` days with student and class names."""
    rows = []
    for record in AccessRecord.since(days).all():
        student = record.student
        school_class = student.school_class if student else None
        rows.append({
            'student': student.name if student else None,
            'class': school_class.name if school_class else None,
            'movement': record.movement.value,
            'recorded_at': record.recorded_at.isoformat()
        })
    return rows

@reports_bp.route('/attendance', methods=['GET'])
@jwt_required()
@staff_required
def attendance_report():
    """Attendance data for the report (JSON or CSV)."""
    try:
        days = current_app.config.get('REPORT_WINDOW_DAYS', 30)
        rows = attendance_rows(days)
        
        if request.args.get('format') == 'csv':
            df = pd.DataFrame(rows, columns=REPORT_COLUMNS)
            
            output = io.StringIO()
            df.to_csv(output, index=False, encoding='utf-8-sig')
            output.seek(0)
            
            return output.getvalue(), 200, {
                'Content-Type': 'text/csv; charset=utf-8',
                'Content-Disposition': 'attachment; filename=attendance_report.csv'
            }
        
        return success_response(data={
            'days': days,
            'total': len(rows),
            'records': rows
        })
        
    except Exception:
        current_app.logger.exception("Error generating attendance report")
        return error_response("Error generating report", 500)
