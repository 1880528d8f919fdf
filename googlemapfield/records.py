"""
Host record access for GoogleMapField.

A host record is whatever owns the persisted location attributes. The field
only needs to read attributes, write them with type casting, and know the
record's type name.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from django.db import models


@runtime_checkable
class HostRecord(Protocol):
    """Capability interface the field requires from its record"""

    @property
    def type_name(self) -> str: ...

    def get(self, name: str) -> Optional[Any]: ...

    def set_casted_field(self, name: str, value: Any) -> None: ...


class ModelRecord:
    """
    Adapts a Django model instance to the HostRecord interface.

    Usage:
        record = ModelRecord(place)
        record.set_casted_field("latitude", "51.5")
        record.get("latitude")  # 51.5 on a FloatField
    """

    def __init__(self, instance: models.Model):
        self.instance = instance

    def __repr__(self):
        return f"<ModelRecord {self.type_name}: {self.instance.pk}>"

    @property
    def type_name(self) -> str:
        return self.instance._meta.object_name

    def get(self, name: str) -> Optional[Any]:
        return getattr(self.instance, name, None)

    def cast_value(self, name: str, value: Any) -> Any:
        """
        Cast value to the declared type of the model field called name.

        Empty values become None on nullable fields and "" on non-null
        fields that allow empty strings, as Django form cleaning does.
        Casting errors (django.core.exceptions.ValidationError) are not caught.
        """
        field = self.instance._meta.get_field(name)
        if value in field.empty_values:
            if field.null:
                return None
            if field.empty_strings_allowed:
                return ""
        return field.to_python(value)

    def set_casted_field(self, name: str, value: Any) -> None:
        field = self.instance._meta.get_field(name)
        setattr(self.instance, field.attname, self.cast_value(name, value))


def as_record(obj) -> HostRecord:
    """
    Wrap obj as a HostRecord.

    Raises:
        TypeError: If obj is neither a HostRecord nor a model instance
    """
    if isinstance(obj, models.Model):
        return ModelRecord(obj)
    if isinstance(obj, HostRecord):
        return obj
    raise TypeError(f"{type(obj).__name__} is not a model instance or host record")
