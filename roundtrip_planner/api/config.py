# api/config.py
"""Configuration management for the round-trip planner API."""
import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_google_maps_config():
    """Get Google Maps configuration."""
    return {
        "api_key": os.getenv("GOOGLE_MAPS_API_KEY", ""),
        "client_id": os.getenv("maps_client_id", ""),
        "client_secret": os.getenv("maps_client_secret", "")
    }


def get_directions_config():
    """Get directions / geocoding request configuration."""
    return {
        # Only automobile travel is planned; override for experiments.
        "mode": os.getenv("DIRECTIONS_MODE", "driving"),
        "alternatives": _env_flag("DIRECTIONS_ALTERNATIVES", True),
        "language": os.getenv("MAPS_LANGUAGE", "en"),
        "region": os.getenv("MAPS_REGION") or None,
        "timeout": int(os.getenv("MAPS_TIMEOUT_SECONDS", "10")),
    }


def get_port():
    """Get port configuration."""
    return int(os.getenv("PORT", 5000))


def get_flask_secret_key():
    """Get the Flask session secret, or None when not configured."""
    return os.getenv("FLASK_SECRET_KEY") or None
