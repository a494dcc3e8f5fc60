import pytest
from drf_spectacular.generators import SchemaGenerator


@pytest.fixture(scope="module")
def schema():
    return SchemaGenerator(urlconf="edhms.api.urls").get_schema(request=None, public=True)


def test_settings_import_documents_both_media_types(schema):
    content = schema["paths"]["/preferences/import/"]["post"]["requestBody"]["content"]
    assert content["application/json"]["schema"]["$ref"].endswith("/SettingsDocumentRequest")
    assert content["multipart/form-data"]["schema"]["$ref"].endswith("/SettingsImportFileRequest")

    file_field = schema["components"]["schemas"]["SettingsImportFileRequest"]["properties"]["file"]
    assert file_field["format"] == "binary"


def test_bed_forecast_response_describes_demand(schema):
    ok = schema["paths"]["/insights/bed-availability/"]["post"]["responses"]["200"]
    assert ok["content"]["application/json"]["schema"]["$ref"].endswith("/BedForecastResponse")

    demand = schema["components"]["schemas"]["Demand"]["properties"]
    assert set(demand) == {"currentOccupancy", "emergencyVisits", "activeAlerts"}
