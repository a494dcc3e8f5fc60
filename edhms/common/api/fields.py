# edhms/common/api/fields.py
from __future__ import annotations

from rest_framework import serializers

from edhms.common.lists import split_comma_list


class CommaSeparatedListField(serializers.ListField):
    """
    Accepts either a JSON list of strings or a single comma-separated string
    (what the console's text inputs send) and always yields a trimmed list.
    """

    def __init__(self, **kwargs):
        kwargs.setdefault("child", serializers.CharField(allow_blank=True))
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = data.split(",")
        values = super().to_internal_value(data)
        return split_comma_list(values)
