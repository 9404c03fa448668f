# File: backend/schoolgate/api/auth.py
"""Authentication API for staff accounts."""
from flask import Blueprint, request, current_app
from flask_jwt_extended import jwt_required
from schoolgate import limiter
from schoolgate.utils.helpers import success_response, error_response
from schoolgate.utils.decorators import current_user
from schoolgate.services.auth_service import AuthService

auth_bp = Blueprint("auth", __name__)

@auth_bp.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint."""
    return success_response(message="Auth service is running")

@auth_bp.route("/login", methods=["POST"])
@limiter.limit("5 per minute")
def login():
    """Staff login (teachers and school office)."""
    try:
        data = request.get_json(silent=True)
        
        if not data:
            return error_response("Request body must be JSON", 400)
        
        email = (data.get("email") or "").strip()
        password = data.get("password") or ""
        
        if not email or not password:
            return error_response("Email and password are required", 400)
        
        result, error = AuthService.login(email, password)
        
        if error:
            current_app.logger.warning(f"Failed login attempt for {email}")
            return error_response(error, 401)
        
        return success_response(
            data=result,
            message="Login successful"
        )
        
    except Exception:
        current_app.logger.exception("Login error")
        return error_response("Internal server error", 500)

@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def get_current_user():
    """Get current user profile."""
    user = current_user()
    
    if not user:
        return error_response("User not found", 404)
    
    return success_response(data=user.to_dict())
