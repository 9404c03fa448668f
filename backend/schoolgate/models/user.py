"""Staff accounts: teachers and school office."""
from enum import Enum
from werkzeug.security import generate_password_hash, check_password_hash
from schoolgate import db
from schoolgate.models.base import BaseModel

class UserRole(Enum):
    """User roles enumeration."""
    TEACHER = 'professora'
    ADMIN = 'admin'

class User(BaseModel):
    """Staff member able to log in."""
    
    __tablename__ = 'users'
    
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    role = db.Column(db.Enum(UserRole), nullable=False, default=UserRole.TEACHER)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    last_login = db.Column(db.DateTime, nullable=True)
    
    classes = db.relationship('SchoolClass', backref='teacher', lazy='dynamic')
    
    def set_password(self, password: str) -> None:
        """Set user password with hashing."""
        self.password_hash = generate_password_hash(password)
    
    def check_password(self, password: str) -> bool:
        """Check if provided password matches user's password."""
        return check_password_hash(self.password_hash, password)
    
    def is_teacher(self) -> bool:
        return self.role == UserRole.TEACHER
    
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
    
    def to_dict(self, exclude: list = None) -> dict:
        """Convert to dictionary excluding sensitive data."""
        exclude = (exclude or []) + ['password_hash']
        
        result = super().to_dict(exclude=exclude)
        result['role'] = self.role.value if self.role else None
        
        return result
    
    def __repr__(self) -> str:
        return f'<User {self.email}>'
