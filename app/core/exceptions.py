class VotingError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class ValidationError(VotingError):
    def __init__(self, message: str = "Invalid request"):
        super().__init__(message, status_code=400)


class UnauthorizedError(VotingError):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, status_code=401)


class ForbiddenError(VotingError):
    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, status_code=403)


class NotFoundError(VotingError):
    def __init__(self, message: str = "Not found"):
        super().__init__(message, status_code=404)


class ConflictError(VotingError):
    def __init__(self, message: str = "Conflict"):
        super().__init__(message, status_code=409)


class StoreError(VotingError):
    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, status_code=500)
