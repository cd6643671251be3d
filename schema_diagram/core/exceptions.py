"""
Custom exceptions for schema_diagram
"""


class DiagramError(Exception):
    """Base exception for all schema_diagram errors"""
    pass


class ConfigurationError(DiagramError, ValueError):
    """Raised when diagram options or a schema document fail validation"""
    pass


class ExporterError(DiagramError):
    """Base exception for all exporter errors"""
    pass


class FileExportError(ExporterError):
    """Raised when file export operations fail"""
    pass


class PathValidationError(ExporterError):
    """Raised when file path is invalid or unsafe"""
    pass
