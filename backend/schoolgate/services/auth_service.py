"""Authentication service for staff accounts."""
from flask_jwt_extended import create_access_token
from schoolgate.models.user import User, UserRole
from schoolgate.utils.validators import Validator
from datetime import datetime

class AuthService:
    @staticmethod
    def login(email: str, password: str) -> tuple[dict, str]:
        """Authenticate user and return an access token."""
        if not email or not password:
            return None, "Email and password are required"
        
        user = User.query.filter_by(email=email.lower().strip()).first()
        
        if not user or not user.check_password(password):
            return None, "Invalid email or password"
        
        if not user.is_active:
            return None, "Account is deactivated"
        
        user.last_login = datetime.utcnow()
        user.save()
        
        access_token = create_access_token(
            identity=str(user.id),
            additional_claims={'role': user.role.value}
        )
        
        return {
            "access_token": access_token,
            "user": user.to_dict()
        }, None
    
    @staticmethod
    def register(email: str, password: str, name: str, role: UserRole = UserRole.TEACHER) -> tuple[dict, str]:
        """Create a staff account."""
        if not all([email, password, name]):
            return None, "Name, email and password are required"
        
        if not Validator.validate_email(email):
            return None, "Invalid email format"
        
        if len(password) < 6:
            return None, "Password must be at least 6 characters long"
        
        email = email.lower().strip()
        if User.query.filter_by(email=email).first():
            return None, "Email already exists"
        
        user = User(
            email=email,
            name=name.strip(),
            role=role
        )
        user.set_password(password)
        user.save()
        
        return user.to_dict(), None
