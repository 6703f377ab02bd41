class ACLError(Exception):
    """Base exception for the Consul ACL SDK"""
    pass

class PreconditionError(ACLError, ValueError):
    """Raised before any request is sent when the arguments cannot be valid"""
    pass

class ACLApiError(ACLError):
    """Raised when the API returns an unexpected status"""
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"Unexpected response code: {status_code} ({message})")

class PermissionDeniedError(ACLApiError):
    """Raised on 403, usually a missing, expired or insufficient token"""
    pass

class ACLDecodeError(ACLError):
    """Raised when a successful response carries a body that cannot be decoded"""
    pass
