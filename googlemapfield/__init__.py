# googlemapfield/__init__.py
"""
Google Map location picker for Django forms.

Features:
- Pick latitude/longitude, zoom and viewport bounds on an interactive map
- Hidden sub-fields kept in sync with the owning record
- Optional search box backed by the Google Maps geocoder
- Per-field options merged over project-wide defaults

Components:
- GoogleMapField: The composite form field
- GoogleMapWidget: Renders the sub-fields and map canvas
- GoogleMapFormMixin: Saves the picked location onto a ModelForm instance
"""
