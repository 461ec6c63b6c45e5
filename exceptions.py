# exceptions.py
"""
Application exceptions.
"""


class ChatApiError(Exception):
    """Base exception for the chat API."""
    pass


class BadRequestError(ChatApiError):
    """Raised when a request is missing a parameter or carries an invalid body."""
    def __init__(self, message: str):
        super().__init__(f"Bad request: {message}")


class PersistenceError(ChatApiError):
    """Raised when the document store fails."""
    def __init__(self, operation: str, original_error: Exception):
        self.operation = operation
        self.original_error = original_error
        super().__init__(f"{operation} failed: {original_error}")


class UpstreamError(ChatApiError):
    """Raised when the language-model API fails."""
    def __init__(self, original_error: Exception):
        self.original_error = original_error
        super().__init__(f"Model call failed: {original_error}")


class ConfigurationError(ChatApiError):
    """Raised for configuration errors."""
    def __init__(self, message: str):
        super().__init__(f"Configuration error: {message}")
