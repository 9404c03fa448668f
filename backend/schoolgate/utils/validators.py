"""Validation utilities for the application."""
import re
from datetime import date
from typing import Dict, List, Any, Optional
from schoolgate.utils.errors import ValidationError

class Validator:
    """Validation helper class."""
    
    @staticmethod
    def validate_email(email: str) -> bool:
        """Validate email format."""
        if not email:
            return False
        pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
        return bool(re.match(pattern, email))
    
    @staticmethod
    def validate_required_fields(data: Dict, required_fields: List[str]) -> Dict[str, Any]:
        """Validate required fields in data."""
        errors = []
        
        for field in required_fields:
            value = data.get(field)
            if value is None or (isinstance(value, str) and not value.strip()):
                errors.append(f"Missing required field: {field}")
        
        return {
            "is_valid": len(errors) == 0,
            "errors": errors
        }
    
    @staticmethod
    def require_badge_code(code: Any) -> str:
        """Return the stripped badge code or raise ValidationError."""
        if not isinstance(code, str) or not code.strip():
            raise ValidationError("QR code not provided")
        return code.strip()
    
    @staticmethod
    def parse_id(value: Any, field: str) -> int:
        """Coerce an identifier sent by a client into an int."""
        if isinstance(value, bool):
            raise ValidationError(f"Invalid {field}")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid {field}")
    
    @staticmethod
    def parse_optional_id(value: Any, field: str) -> Optional[int]:
        if value is None or value == '':
            return None
        return Validator.parse_id(value, field)
    
    @staticmethod
    def parse_date(value: Any, field: str) -> date:
        """Parse YYYY-MM-DD; a missing value means today."""
        if not value:
            return date.today()
        try:
            return date.fromisoformat(str(value)[:10])
        except ValueError:
            raise ValidationError(f"Invalid {field}. Use YYYY-MM-DD")
