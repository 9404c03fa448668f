"""Custom decorators for authorization."""
from functools import wraps
from flask_jwt_extended import get_jwt_identity
from schoolgate import db
from schoolgate.models.user import User
from schoolgate.utils.helpers import error_response

def current_user():
    """Load the staff user behind the JWT of the current request."""
    identity = get_jwt_identity()
    if identity is None:
        return None
    return db.session.get(User, int(identity))

def staff_required(f):
    """Decorator to require any active staff account."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        user = current_user()
        
        if not user:
            return error_response("User not found", 404)
        
        if not user.is_active:
            return error_response("Account is deactivated", 403)
        
        return f(*args, **kwargs)
    return decorated_function

def admin_required(f):
    """Decorator to require admin role."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        user = current_user()
        
        if not user:
            return error_response("User not found", 404)
        
        if not user.is_admin():
            return error_response("Admin access required", 403)
        
        return f(*args, **kwargs)
    return decorated_function
