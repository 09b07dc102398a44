import pytest

from jsonapi.errors import (
    JsonApiError,
    SchemaError,
    bad_request,
    invalid_field_value_in_body,
    invalid_page_number_parameter,
    invalid_page_size_parameter,
    malformed_filter_parameter,
    unknown_field_in_body,
    unknown_parameter,
)


def test_bad_request_message():
    err = bad_request("Invalid JSON", "The provided JSON body could not be read.")
    assert str(err) == "400 Bad Request: The provided JSON body could not be read."
    assert err.status == 400
    assert err.title == "Invalid JSON"


def test_invalid_field_value_message_and_meta():
    err = invalid_field_value_in_body("int", '"not an int"', "int")
    assert str(err) == "400 Bad Request: The field value is invalid for the expected type."
    assert err.meta["field"] == "int"
    assert err.meta["value"] == '"not an int"'


def test_unknown_field_message():
    err = unknown_field_in_body("mocktype", "unknown")
    assert str(err) == '400 Bad Request: "unknown" is not a known field.'
    assert err.meta["type"] == "mocktype"


def test_malformed_filter_parameter():
    err = malformed_filter_parameter('{"thisis:invalid"}')
    assert err.status == 400
    assert err.source["parameter"] == "filter"
    assert err.meta["bad-filter"] == '{"thisis:invalid"}'


@pytest.mark.parametrize(
    "factory, parameter",
    [
        (invalid_page_size_parameter, "page[size]"),
        (invalid_page_number_parameter, "page[number]"),
    ],
)
def test_page_parameters(factory, parameter):
    err = factory("-1")
    assert err.source["parameter"] == parameter
    assert "-1" in err.meta.values()
    assert str(err).startswith("400 Bad Request: ")


def test_unknown_parameter_names_parameter():
    err = unknown_parameter("unknownparam")
    assert err.source["parameter"] == "unknownparam"
    assert '"unknownparam"' in str(err)


def test_equality_ignores_id():
    first = unknown_parameter("unknownparam")
    second = unknown_parameter("unknownparam")
    assert first.id != second.id
    assert first == second
    assert first != unknown_parameter("other")


def test_error_can_be_raised_and_caught():
    with pytest.raises(JsonApiError) as info:
        raise invalid_page_size_parameter("abc")
    assert info.value == invalid_page_size_parameter("abc")


def test_schema_error_keeps_message_and_is_value_error():
    err = SchemaError("jsonapi: relationship type is empty")
    assert str(err) == "jsonapi: relationship type is empty"
    assert isinstance(err, ValueError)
    assert not isinstance(err, JsonApiError)