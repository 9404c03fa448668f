# File: backend/schoolgate/api/pickups.py
"""Outstanding release requests."""
from flask import Blueprint
from flask_jwt_extended import jwt_required
from schoolgate.services.pickup_service import PickupService, get_pending_releases
from schoolgate.utils.helpers import success_response, gate_error_response
from schoolgate.utils.decorators import staff_required
from schoolgate.utils.errors import NotFoundError

pickups_bp = Blueprint('pickups', __name__)

@pickups_bp.route('/pending', methods=['GET'])
@jwt_required()
@staff_required
def list_pending():
    """Guardians still waiting for a teacher decision."""
    pending = get_pending_releases().list()
    return success_response(data=[entry.to_dict() for entry in pending])

@pickups_bp.route('/pending/<int:student_id>', methods=['DELETE'])
@jwt_required()
@staff_required
def cancel_pending(student_id):
    """Cancel a release request; the front desk is told."""
    try:
        entry = PickupService.cancel(student_id)
    except NotFoundError as e:
        return gate_error_response(e)
    
    return success_response(data=entry.to_dict(), message="Release request cancelled")
