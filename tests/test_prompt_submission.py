import pytest
from flask import Flask, request

from models.prompt_submission import extract_submission_fields, validate_submission
from utils.errors import SubmissionValidationError


def test_valid_submission_is_stripped():
    submission = validate_submission({"business": "  coffee shop ", "location": "Downtown", "lat": "12.9", "lon": "77.6"})

    assert submission.business == "coffee shop"
    assert submission.lat == "12.9"


def test_all_missing_fields_are_joined_in_order():
    with pytest.raises(SubmissionValidationError) as excinfo:
        validate_submission({})

    assert excinfo.value.status_code == 400
    assert excinfo.value.message == (
        '"business" is required,"location" is required,"lat" is required,"lon" is required'
    )


def test_empty_and_out_of_range_values():
    with pytest.raises(SubmissionValidationError) as excinfo:
        validate_submission({"business": "   ", "location": "Downtown", "lat": "95", "lon": "east"})

    assert excinfo.value.message.split(",") == [
        '"business" is not allowed to be empty',
        '"lat" must be a number between -90 and 90',
        '"lon" must be a number between -180 and 180',
    ]


def test_numeric_coordinates_become_strings():
    submission = validate_submission({"business": "gym", "location": "Harbour", "lat": -33.86, "lon": 151.2})

    assert submission.lat == "-33.86"
    assert submission.lon == "151.2"


def test_extract_fields_from_nested_form_keys():
    app = Flask(__name__)
    with app.test_request_context("/result", method="POST", data={"prompt[business]": "bakery", "lat": "1"}):
        fields = extract_submission_fields(request)

    assert fields == {"business": "bakery", "location": None, "lat": "1", "lon": None}


def test_extract_fields_from_flat_json():
    app = Flask(__name__)
    with app.test_request_context("/result", method="POST", json={"business": "bakery", "location": "Old Town"}):
        fields = extract_submission_fields(request)

    assert fields["business"] == "bakery"
    assert fields["location"] == "Old Town"
    assert fields["lat"] is None
