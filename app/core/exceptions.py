"""
Custom error types for image resolution
"""

from typing import Optional


class ImageResolutionError(Exception):
    """Base exception for category image resolution errors"""

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class ConfigurationError(ImageResolutionError):
    """Exception raised when required configuration is missing or invalid

    Not retryable without operator intervention.
    """

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message, "CONFIGURATION_ERROR")
        self.config_key = config_key


class ProviderError(ImageResolutionError):
    """Exception raised when the image search provider fails

    Args:
        message (str): Error message
        status_code (Optional[int]): HTTP status returned by the provider (if any)
        search_term (Optional[str]): Query that was being executed
    Example:
        raise ProviderError("Pixabay API error: 429", status_code=429)
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        search_term: Optional[str] = None,
    ):
        super().__init__(message, "PROVIDER_ERROR")
        self.status_code = status_code
        self.search_term = search_term


class ValidationError(ImageResolutionError):
    """Exception raised when input validation fails"""

    def __init__(self, message: str, validation_errors: Optional[list] = None):
        super().__init__(message, "VALIDATION_ERROR")
        self.validation_errors = validation_errors or []


class CategoryTermsError(ImageResolutionError):
    """Exception raised when the category term tables cannot be loaded"""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, "CATEGORY_TERMS_ERROR")
        self.path = path
