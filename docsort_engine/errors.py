"""
Exception types for the Document Classification Engine.
"""


class InvalidDocumentInputError(ValueError):
    """Raised when a document input cannot be analyzed (wrong types, bad hints)."""
    pass


class RegistryConfigurationError(ValueError):
    """Raised when a category or issuer template table is malformed.

    Registries are built once at process start, so this surfaces
    configuration mistakes before any document is analyzed.
    """
    pass
