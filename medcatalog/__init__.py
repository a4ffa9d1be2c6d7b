"""
Medications API

FastAPI service for looking up medication records in the openFDA NDC directory.
"""

__version__ = "0.1.0"
