"""
Custom Exceptions for unitfmt

Exception hierarchy for unit lookup, compound unit parsing, formatting
and configuration failures.
"""

from typing import Dict, List, Any


class UnitsError(Exception):
    """Base exception for all unitfmt errors"""

    def __init__(self, message: str, details: dict = None):
        self.details = details or {}
        super().__init__(message)

    def __str__(self):
        base_msg = super().__str__()
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{base_msg} (Details: {detail_str})"
        return base_msg


# ===================================================================
# CONVERSION ERRORS
# ===================================================================

class ConversionError(UnitsError, ValueError):
    """Raised when a quantity cannot be converted"""

    def __init__(self, message: str, from_unit: str = None, to_unit: str = None):
        self.from_unit = from_unit
        self.to_unit = to_unit
        details = {}
        if from_unit:
            details['from_unit'] = from_unit
        if to_unit:
            details['to_unit'] = to_unit
        super().__init__(message, details)


class UnknownUnitError(ConversionError):
    """Raised when a symbol is not registered and compound parsing is disabled"""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"Unknown unit: '{symbol}'", from_unit=symbol)


class UnresolvableUnitError(ConversionError):
    """
    Raised when part of a unit expression matches no grammar rule

    ``substring`` is the piece the recursion narrowed down to, ``expression``
    the full string handed to the parser (when known).
    """

    def __init__(self, substring: str, expression: str = None, reason: str = None):
        self.substring = substring
        self.expression = expression
        message = reason or f"Cannot resolve unit '{substring}'"
        super().__init__(message, from_unit=expression)
        self.details['substring'] = repr(substring)


class UnmatchedParenthesisError(UnresolvableUnitError):
    """Raised when parentheses in a unit expression do not balance"""

    def __init__(self, substring: str, expression: str = None):
        super().__init__(substring, expression, f"Unmatched parenthesis in '{substring}'")


class EmptySubexpressionError(UnresolvableUnitError):
    """Raised when an operator split leaves nothing on one side"""

    def __init__(self, expression: str = None):
        super().__init__("", expression, "Empty unit subexpression")


# ===================================================================
# OTHER ERRORS
# ===================================================================

class FormattingError(UnitsError, ValueError):
    """Raised when a value cannot be rendered"""

    def __init__(self, message: str, value=None):
        details = {}
        if value is not None:
            details['value'] = str(value)
        super().__init__(message, details)


class ConfigurationError(UnitsError):
    """Raised when configuration is invalid"""

    def __init__(self, message: str, config_section: str = None, parameter: str = None):
        details = {}
        if config_section:
            details['section'] = config_section
        if parameter:
            details['parameter'] = parameter
        super().__init__(message, details)


# ===================================================================
# EXCEPTION UTILITIES
# ===================================================================

def create_error_summary(errors: List[Exception]) -> Dict[str, Any]:
    """
    Create summary of errors for reporting

    Args:
        errors: List of exceptions

    Returns:
        Dictionary with error summary
    """
    error_counts = {}
    error_details = []

    for error in errors:
        error_type = type(error).__name__
        error_counts[error_type] = error_counts.get(error_type, 0) + 1

        error_info = {
            'type': error_type,
            'message': str(error),
        }

        if hasattr(error, 'details'):
            error_info['details'] = error.details

        error_details.append(error_info)

    return {
        'total_errors': len(errors),
        'error_counts': error_counts,
        'error_details': error_details
    }
