import pytest

from porter_payroll.core.exceptions import ValidationError
from porter_payroll.documents.schemas import DocumentFields, parse_document_fields
from porter_payroll.documents.template import fill_template, format_document_date

FIELDS = DocumentFields(
    brigade="5 Bde",
    unit_name="Alpha <Unit>",
    financial_year="2024-25",
    brigade_name="North Group",
    letter_no="L/42",
    date="2025-03-05",
)


def test_fill_replaces_every_occurrence_and_alias():
    out = fill_template("{{unitName}}|{{unit_name}}|{{unitName}}|{{letterNo}}|{{date}}|{{remarks}}", FIELDS)

    assert out == "Alpha &lt;Unit&gt;|Alpha &lt;Unit&gt;|Alpha &lt;Unit&gt;|L/42|05/03/2025|"


def test_unknown_placeholders_are_left_alone():
    assert fill_template("{{signature}}", FIELDS) == "{{signature}}"


@pytest.mark.parametrize(
    "value, expected",
    [("2025-03-05", "05/03/2025"), ("2025-12-31T10:00:00", "31/12/2025"), ("yesterday", "")],
)
def test_format_document_date(value, expected):
    assert format_document_date(value) == expected


def test_parse_requires_fields():
    with pytest.raises(ValidationError) as exc:
        parse_document_fields({"brigade": "5 Bde"})

    assert {e.field for e in exc.value.errors} == {"unitName", "financialYear", "brigadeName", "letterNo", "date"}


def test_parse_empty_payload():
    with pytest.raises(ValidationError) as exc:
        parse_document_fields({})

    assert exc.value.message.startswith("No data provided")
