"""
Defaults and project-level configuration for GoogleMapField.

Projects may override defaults in settings:

    GOOGLE_MAP_FIELD = {
        "api_key": "...",
        "default_options": {
            "show_search_box": True,
            "map": {"zoom": 10},
        },
    }

The APP_GOOGLE_MAPS_KEY environment variable takes precedence over any
configured API key.
"""

import logging
import os
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlencode

from django.conf import settings

from .options import merge_options

logger = logging.getLogger(__name__)

LOCATION_FIELDS = ("Latitude", "Longitude", "Zoom", "Bounds")

DEFAULT_MAP_TYPE = "ROADMAP"

# Name of the global function the Maps API calls once loaded
INIT_CALLBACK = "googlemapfieldInit"

API_KEY_ENV = "APP_GOOGLE_MAPS_KEY"

MAPS_API_URL = "https://maps.googleapis.com/maps/api/js"

SETTINGS_NAME = "GOOGLE_MAP_FIELD"

DEFAULT_OPTIONS = MappingProxyType(
    {
        "api_key": None,
        "show_search_box": False,
        "field_names": MappingProxyType({name: name for name in LOCATION_FIELDS}),
        "default_field_values": MappingProxyType({}),
        "map": MappingProxyType({"zoom": 4}),
    }
)


def get_settings() -> Mapping[str, Any]:
    return getattr(settings, SETTINGS_NAME, None) or {}


def get_default_options() -> Dict[str, Any]:
    """
    Build the default option set for a new field.

    Returns:
        dict: DEFAULT_OPTIONS merged with GOOGLE_MAP_FIELD["default_options"]
    """
    return merge_options(DEFAULT_OPTIONS, get_settings().get("default_options"))


def get_api_key(options: Optional[Mapping[str, Any]] = None) -> Optional[str]:
    """
    Resolve the Google Maps API key.

    Lookup order: environment variable, GOOGLE_MAP_FIELD["api_key"],
    then the "api_key" entry of the given field options.
    """
    key = os.environ.get(API_KEY_ENV) or get_settings().get("api_key")
    if not key and options:
        key = options.get("api_key")
    if not key:
        warn_missing_api_key()
        return None
    return key


def maps_script_url(api_key: Optional[str] = None) -> str:
    """
    Build the Maps JavaScript API URL that invokes INIT_CALLBACK once loaded.

    Args:
        api_key: Optional API key appended as the "key" parameter

    Returns:
        str: Script URL
    """
    params = {"callback": INIT_CALLBACK}
    if api_key:
        params["key"] = api_key
    return f"{MAPS_API_URL}?{urlencode(params)}"


@lru_cache(maxsize=None)
def warn_missing_api_key() -> None:
    """Log the missing key once per process rather than on every render"""
    logger.warning(f"No Google Maps API key configured; set {API_KEY_ENV} or {SETTINGS_NAME}['api_key']")
