import django_filters

from edhms.records.models import MedicalRecord


class MedicalRecordFilter(django_filters.FilterSet):
    patient_id = django_filters.UUIDFilter(field_name="patient_id")
    hospital_id = django_filters.UUIDFilter(field_name="hospital_id")
    visit_from = django_filters.IsoDateTimeFilter(field_name="visit_date", lookup_expr="gte")
    visit_to = django_filters.IsoDateTimeFilter(field_name="visit_date", lookup_expr="lte")

    class Meta:
        model = MedicalRecord
        fields = ["visit_type", "severity_level", "status"]
