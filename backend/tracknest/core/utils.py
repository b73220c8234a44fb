"""
Utility functions for the application.
"""
from typing import Dict


def format_error(message: str) -> Dict[str, str]:
    """Format error response."""
    return {"message": message}


def describe_validation_errors(errors) -> str:
    """One-line summary of pydantic/FastAPI validation errors."""
    parts = []
    for error in errors:
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"
