"""Application error hierarchy mapped onto HTTP status codes."""

class SchoolGateError(Exception):
    """Base error carrying the HTTP status it should surface as."""
    
    status_code = 500
    
    def __init__(self, message: str = None, status_code: int = None):
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__
        if status_code is not None:
            self.status_code = status_code
    
    @property
    def is_internal(self) -> bool:
        return self.status_code >= 500

class ValidationError(SchoolGateError):
    """Invalid or missing input."""
    status_code = 400

class AuthenticationError(SchoolGateError):
    """Invalid credentials."""
    status_code = 401

class NotFoundError(SchoolGateError):
    """Resource not found."""
    status_code = 404

class DataIntegrityError(SchoolGateError):
    """Stored data is inconsistent."""
    status_code = 500

class PersistenceError(SchoolGateError):
    """Database write failed."""
    status_code = 500
