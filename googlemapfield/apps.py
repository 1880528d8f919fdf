# googlemapfield/apps.py
"""
Django app configuration for the Google Map location field.
"""

from django.apps import AppConfig


class GoogleMapFieldConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "googlemapfield"
    verbose_name = "Google Map Field"
