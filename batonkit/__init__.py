"""JSON record types for baton-style iRODS client tools."""

__version__ = "0.1.0"
__all__ = ["queries", "records"]