"""
GoogleMapField
Lets an editor record a precise location (latitude/longitude, zoom and the
visible map bounds) onto a record using an interactive Google map. The editor
places the marker and the landing coordinates are written to hidden
sub-fields, which are then saved onto the record. An optional search box uses
the Google Maps geocoder to jump to a location.

Example:
    field = GoogleMapField(place, "Location", {"show_search_box": True})
    field.set_value({"Latitude": "51.5", "Longitude": "-0.12", "Zoom": "12", "Bounds": ""})
    field.save_into(place)
"""

import copy
import json
import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from django import forms
from django.core.exceptions import ValidationError
from django.core.serializers.json import DjangoJSONEncoder
from django.forms.boundfield import BoundField
from django.utils.translation import gettext_lazy as _

from .conf import DEFAULT_MAP_TYPE, LOCATION_FIELDS, get_default_options
from .options import copy_options, get_path, merge_options, replace_recursive, set_path, split_path
from .records import HostRecord, ModelRecord, as_record
from .widgets import GoogleMapWidget

logger = logging.getLogger(__name__)

NO_CHANGE_TRACK_CLASS = "no-change-track"

# (logical name, label, css class)
LOCATION_CHILDREN = (
    ("Latitude", _("Lat"), "googlemapfield-latfield"),
    ("Longitude", _("Lng"), "googlemapfield-lngfield"),
    ("Zoom", _("Zoom"), "googlemapfield-zoomfield"),
    ("Bounds", _("Bounds"), "googlemapfield-boundsfield"),
)


class MapChildField:
    """
    One scalar input making up the location value.

    Sub-fields with track_changes=False carry the no-change-track class so
    that editing them alone does not flag the form as having unsaved changes.
    """

    def __init__(
        self,
        key,
        label,
        name=None,
        value=None,
        widget=None,
        css_class="",
        track_changes=False,
        namespaced=True,
        attrs=None,
    ):
        self.key = key
        self.label = label
        self.name = name or key
        self.value = value
        self.widget = widget or forms.HiddenInput()
        self.css_class = css_class
        self.track_changes = track_changes
        self.namespaced = namespaced
        self.attrs = attrs or {}

    def __repr__(self):
        return f"<MapChildField {self.name}={self.value!r}>"

    @property
    def css_classes(self) -> List[str]:
        classes = [self.css_class] if self.css_class else []
        if not self.track_changes:
            classes.append(NO_CHANGE_TRACK_CLASS)
        return classes

    def get_value(self):
        return self.value

    def set_value(self, value) -> "MapChildField":
        self.value = value
        return self

    def data_value(self):
        """Raw value as it would be submitted"""
        return self.value

    def html_name(self, parent_name: str) -> str:
        return f"{parent_name}[{self.key}]" if self.namespaced else self.key

    def render(self, name=None, value=None):
        attrs = {**self.attrs, "class": " ".join(self.css_classes)}
        return self.widget.render(name or self.name, value if value is not None else self.data_value(), attrs=attrs)


class GoogleMapBoundField(BoundField):
    """Bound field that attaches the client settings payload on render"""

    def value(self):
        if not self.form.is_bound:
            return self.field.get_value()
        return super().value()

    def as_widget(self, widget=None, attrs=None, only_initial=False):
        attrs = {**(attrs or {}), "data-settings": self.field.settings_json()}
        return super().as_widget(widget=widget, attrs=attrs, only_initial=only_initial)


class GoogleMapField(forms.Field):
    """
    Composite location field bound to a single host record.

    Args:
        record: Model instance or HostRecord the location belongs to
        title: Field label
        options: Per-field options merged over the defaults
        defaults: Default options, conf.get_default_options() when omitted
    """

    widget = GoogleMapWidget

    def __init__(self, record, title=None, options=None, *, defaults=None, **kwargs):
        self.record: HostRecord = as_record(record)
        self.options: Dict[str, Any] = {}
        self.setup_options(options, defaults)
        self.setup_children()

        kwargs.setdefault("required", False)
        kwargs.setdefault("label", title)
        kwargs.setdefault("initial", self.get_value())
        kwargs.setdefault("widget", GoogleMapWidget(api_key=self.get_option("api_key")))
        super().__init__(**kwargs)
        self.widget.children = self.children

        logger.debug(f"Created google map field {self.name} with {len(self.children)} sub-fields")

    def __deepcopy__(self, memo):
        result = super().__deepcopy__(memo)
        result.options = copy_options(self.options)
        result.children = copy.deepcopy(self.children, memo)
        result.location_fields = copy.deepcopy(self.location_fields, memo)
        result.widget.children = result.children
        return result

    @property
    def name(self) -> str:
        """Stable identifier derived from the record type and mapped coordinate names"""
        return f"{self.record.type_name}_{self.child_field_name('Latitude')}_{self.child_field_name('Longitude')}"

    def setup_options(self, options=None, defaults=None) -> Dict[str, Any]:
        """Merge options preserving the first level of mapping keys"""
        if defaults is None:
            defaults = get_default_options()
        self.options = merge_options(defaults, options)
        return self.options

    def setup_children(self) -> List[MapChildField]:
        """Create the hidden location sub-fields, and optionally the search box"""
        name = self.name
        self.location_fields: Dict[str, MapChildField] = {}
        for key, label, css_class in LOCATION_CHILDREN:
            self.location_fields[key] = MapChildField(
                key,
                label,
                name=f"{name}[{key}]",
                value=self.record_field_data(key),
                css_class=css_class,
            )
        self.children = list(self.location_fields.values())

        if self.get_option("show_search_box"):
            self.children.append(
                MapChildField(
                    "Search",
                    _("Search"),
                    widget=forms.TextInput(),
                    css_class="googlemapfield-searchfield",
                    track_changes=True,
                    namespaced=False,
                    attrs={"placeholder": _("Search for a location")},
                )
            )

        return self.children

    def get_child_fields(self) -> List[MapChildField]:
        return self.children

    def child_field_name(self, name: str) -> Optional[str]:
        field_names = self.get_option("field_names")
        if not isinstance(field_names, Mapping):
            return None
        return field_names.get(name)

    def record_field_data(self, name: str):
        field_name = self.child_field_name(name)
        value = self.record.get(field_name) if field_name else None
        return value or self.get_default_value(name)

    def get_default_value(self, name: str):
        field_values = self.get_option("default_field_values")
        if not isinstance(field_values, Mapping):
            return None
        return field_values.get(name)

    def get_lat_data(self):
        """Latitude stored on the record, without default fallback"""
        return self.record.get(self.child_field_name("Latitude"))

    def get_lng_data(self):
        """Longitude stored on the record, without default fallback"""
        return self.record.get(self.child_field_name("Longitude"))

    def get_option(self, name: str):
        """
        Get a merged option by name; nested options use dots, e.g. "map.zoom".
        Missing options return None.
        """
        return get_path(self.options, name)

    def set_option(self, name: str, value) -> "GoogleMapField":
        """
        Set an option, creating any missing levels of a dotted name.
        """
        set_path(self.options, split_path(name), value)
        self.widget.api_key = self.get_option("api_key")
        return self

    def get_value(self) -> Dict[str, Any]:
        return {key: child.get_value() for key, child in self.location_fields.items()}

    def set_value(self, value: Mapping) -> "GoogleMapField":
        """Overwrite the sub-field values from a location mapping, verbatim"""
        for key, child in self.location_fields.items():
            child.set_value(value.get(key))
        return self

    def save_into(self, record) -> "GoogleMapField":
        """
        Write the sub-field values onto the record using casted assignment.

        Casting errors raised by the record propagate to the caller.
        """
        record = as_record(record)
        for key, child in self.location_fields.items():
            record.set_casted_field(self.child_field_name(key), child.data_value())
        logger.debug(f"Saved google map field {self.name} into {record.type_name}")
        return self

    def get_js_options(self) -> Dict[str, Any]:
        """
        Build the settings payload read by the client script.

        See https://developers.google.com/maps/documentation/javascript/reference
        """
        zoom = self.record_field_data("Zoom")
        js_options = {
            "coords": [
                self.record_field_data("Latitude"),
                self.record_field_data("Longitude"),
            ],
            "map": {
                "zoom": zoom or self.get_option("map.zoom"),
                "mapTypeId": DEFAULT_MAP_TYPE,
            },
        }
        js_options = replace_recursive(js_options, self.options)

        # "map.zoom" option is only the fallback when the record has no zoom
        if zoom and isinstance(js_options.get("map"), dict):
            js_options["map"]["zoom"] = zoom
        return js_options

    def settings_json(self) -> str:
        return json.dumps(self.get_js_options(), cls=DjangoJSONEncoder)

    def render(self, renderer=None):
        return self.widget.render(
            self.name,
            self.get_value(),
            attrs={"data-settings": self.settings_json()},
            renderer=renderer,
        )

    def get_bound_field(self, form, field_name):
        return GoogleMapBoundField(form, self, field_name)

    def to_python(self, value):
        if not isinstance(value, Mapping):
            value = {}
        return {key: value.get(key) for key in LOCATION_FIELDS}

    def validate(self, value):
        if self.required and not (value.get("Latitude") and value.get("Longitude")):
            raise ValidationError(self.error_messages["required"], code="required")

    def has_changed(self, initial, data):
        if self.disabled:
            return False

        initial, data = self.to_python(initial), self.to_python(data)
        for key in LOCATION_FIELDS:
            try:
                if self.cast_value(key, initial[key]) != self.cast_value(key, data[key]):
                    return True
            except ValidationError:
                return True
        return False

    def cast_value(self, name: str, value):
        """Cast a location value to the type of the record attribute it is saved into"""
        field_name = self.child_field_name(name)
        if field_name and isinstance(self.record, ModelRecord):
            return self.record.cast_value(field_name, value)
        return "" if value is None else str(value)
