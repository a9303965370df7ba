"""dentalctl — validation and access-control core for a dental clinic system."""

__version__ = "0.1.0"
