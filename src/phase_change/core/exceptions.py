# core/exceptions.py
class ConverterError(Exception):
    """Base exception for converter errors"""
    pass

class ConfigurationError(ConverterError):
    """Raised when a conversion request is missing its source or target type"""
    pass

class UnsupportedFormatError(ConverterError):
    """Raised when format is not supported"""
    pass

class NoDirectConverterError(UnsupportedFormatError):
    """Raised when no converter is registered for an exact format pair"""

    def __init__(self, source, target):
        self.source = source
        self.target = target
        super().__init__(f"No converter available from {source} to {target}")

class NoConversionPathError(UnsupportedFormatError):
    """Raised when no chain of converters links two formats"""

    def __init__(self, source, target):
        self.source = source
        self.target = target
        super().__init__(f"No conversion path available from {source} to {target}")

class ConversionFailedError(ConverterError):
    """Raised when a converter fails to produce its output"""
    pass

class DependencyError(ConverterError):
    """Raised when required dependency is missing"""
    pass
