# googlemapfield/forms.py
from django.utils.translation import gettext_lazy as _

from .fields import GoogleMapField


class GoogleMapFormMixin:
    """
    ModelForm mixin adding a GoogleMapField bound to the form's instance.

    The location attributes should not be listed in Meta.fields; the map
    field writes them onto the instance when the form is saved.

    Example:
        class PlaceForm(GoogleMapFormMixin, forms.ModelForm):
            map_field_options = {"show_search_box": True}

            class Meta:
                model = Place
                fields = ["title"]
    """

    map_field_title = _("Location")
    map_field_options = None

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        field = GoogleMapField(self.instance, self.map_field_title, self.map_field_options)
        self.map_field_name = field.name
        self.fields[field.name] = field

    @property
    def map_field(self) -> GoogleMapField:
        return self.fields[self.map_field_name]

    def map_value_omitted(self) -> bool:
        """True when the submission carries none of the location sub-fields"""
        return self.map_field.widget.value_omitted_from_data(self.data, self.files, self.add_prefix(self.map_field_name))

    def save(self, commit=True):
        # Leave the stored location alone when the form did not submit it
        if not self.map_value_omitted():
            self.map_field.set_value(self.cleaned_data.get(self.map_field_name) or {})
            self.map_field.save_into(self.instance)
        return super().save(commit=commit)
