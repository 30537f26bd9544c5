"""
Custom Exceptions for DomainHub
"""

class DomainHubException(Exception):
    """Base exception for all DomainHub errors"""
    def __init__(self, message: str, error_code: str = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)

class ValidationException(DomainHubException):
    """Raised when input validation fails"""
    pass

class NotFoundException(DomainHubException):
    """Raised when a referenced record does not exist"""
    pass

class DatabaseException(DomainHubException):
    """Raised when the database layer cannot serve a request"""
    pass

class BackendException(DatabaseException):
    """Raised when a storage backend or its client library fails"""
    pass

class QueryException(BackendException):
    """Raised when a backend rejects a statement it cannot run"""
    pass

class ConfigurationException(DomainHubException):
    """Raised when backend credentials or settings are missing"""
    pass
