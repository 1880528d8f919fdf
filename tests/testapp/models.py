from django.db import models


class Place(models.Model):
    """Stores its location under the default attribute names"""

    title = models.CharField(max_length=100, blank=True)
    Latitude = models.FloatField(null=True, blank=True)
    Longitude = models.FloatField(null=True, blank=True)
    Zoom = models.PositiveSmallIntegerField(null=True, blank=True)
    Bounds = models.TextField(blank=True)

    def __str__(self):
        return self.title


class Venue(models.Model):
    """Stores its location under custom attribute names"""

    name = models.CharField(max_length=100)
    lat = models.DecimalField(max_digits=10, decimal_places=7, null=True, blank=True)
    lng = models.DecimalField(max_digits=10, decimal_places=7, null=True, blank=True)
    zoom_level = models.PositiveSmallIntegerField(null=True, blank=True)
    viewport = models.TextField(blank=True)

    def __str__(self):
        return self.name


VENUE_FIELD_NAMES = {
    "Latitude": "lat",
    "Longitude": "lng",
    "Zoom": "zoom_level",
    "Bounds": "viewport",
}
