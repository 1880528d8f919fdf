import copy

from django import forms

from .conf import LOCATION_FIELDS, get_api_key, maps_script_url


class GoogleMapWidget(forms.Widget):
    """
    Renders the location sub-fields together with the map canvas.

    The client script reads the "data-settings" attribute of the wrapper
    element and keeps the hidden inputs in sync with the map marker.
    """

    template_name = "googlemapfield/widgets/google_map.html"

    def __init__(self, children=None, api_key=None, attrs=None):
        attrs = {"class": "googlemapfield", **(attrs or {})}
        self.children = list(children or [])
        self.api_key = api_key
        super().__init__(attrs)

    def __deepcopy__(self, memo):
        obj = super().__deepcopy__(memo)
        obj.children = copy.deepcopy(self.children, memo)
        return obj

    @property
    def media(self):
        return forms.Media(
            css={"all": ["googlemapfield/css/GoogleMapField.css"]},
            js=[
                "googlemapfield/js/GoogleMapField.js",
                maps_script_url(get_api_key({"api_key": self.api_key})),
            ],
        )

    def get_context(self, name, value, attrs):
        context = super().get_context(name, value, attrs)
        value = value if isinstance(value, dict) else {}
        context["widget"]["children"] = [
            child.render(
                name=child.html_name(name),
                value=value.get(child.key, child.data_value()),
            )
            for child in self.children
        ]
        return context

    def format_value(self, value):
        return value

    def value_from_datadict(self, data, files, name):
        return {key: data.get(f"{name}[{key}]") for key in LOCATION_FIELDS}

    def value_omitted_from_data(self, data, files, name):
        return all(f"{name}[{key}]" not in data for key in LOCATION_FIELDS)
