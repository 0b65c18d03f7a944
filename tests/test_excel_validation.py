"""
Tests for Excel import/export of guest lists
"""

import io

import pandas as pd

from app.services.excel_service import ExcelService

from conftest import make_guest

def create_test_excel(data):
    """Helper function to create Excel bytes from data"""
    df = pd.DataFrame(data)
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        df.to_excel(writer, index=False)
    return buffer.getvalue()

def test_validate_excel_structure_valid():
    """Name column is enough, in any case"""
    df = pd.DataFrame({'NAME ': ['John Doe'], 'Email': ['j@x.com']})

    is_valid, errors = ExcelService.validate_excel_structure(df)

    assert is_valid
    assert errors == []

def test_validate_excel_structure_missing_name():
    """Company Name alone must not count as the name column"""
    df = pd.DataFrame({'Company Name': ['Acme'], 'Email': ['j@x.com']})

    is_valid, errors = ExcelService.validate_excel_structure(df)

    assert not is_valid
    assert "Missing required columns: name" in errors[0]

def test_parse_guests_reads_contact_columns():
    content = create_test_excel({
        'Name': ['John Doe', 'Jane Smith'],
        'Phone Number': [5551234, 5555678],
        'Email': ['john@example.com', 'jane@example.com'],
        'Company Name': ['Acme', 'Globex'],
    })

    success, errors, guests = ExcelService.parse_guests(content)

    assert success
    assert errors == []
    assert [g.name for g in guests] == ['John Doe', 'Jane Smith']
    assert guests[0].phone_number == '5551234'
    assert guests[1].email == 'jane@example.com'
    assert guests[1].company_name == 'Globex'
    assert guests[0].category is None

def test_parse_guests_skips_blank_names_and_renders_numeric_phones():
    content = create_test_excel({
        'Name': ['John Doe', None, '   '],
        'Phone Number': [5551234.0, None, 42.0],
    })

    success, errors, guests = ExcelService.parse_guests(content)

    assert success
    assert len(guests) == 1
    assert guests[0].phone_number == '5551234'

def test_parse_guests_reads_optional_flags():
    content = create_test_excel({
        'Name': ['John Doe', 'Jane Smith'],
        'Category': ['VIP', None],
        'Attendance': ['Yes', 'No'],
        'Gift': ['yes', ''],
    })

    success, errors, guests = ExcelService.parse_guests(content)

    assert success
    assert guests[0].attending is True
    assert guests[0].has_gift is True
    assert guests[0].category == 'VIP'
    assert guests[1].attending is False
    assert guests[1].category is None

def test_parse_guests_rejects_unreadable_file():
    success, errors, guests = ExcelService.parse_guests(b"not an excel file")

    assert not success
    assert "Error reading Excel file" in errors[0]
    assert guests == []

def test_export_guests_writes_yes_no_flags():
    guests = [
        make_guest("John Doe", email="john@example.com", category="VIP", attending=True, has_gift=True),
        make_guest("Jane Smith", amount="100"),
    ]

    content = ExcelService.export_guests(guests)
    df = pd.read_excel(io.BytesIO(content), sheet_name='Guests')

    assert list(df.columns) == [header for header, _ in ExcelService.EXPORT_HEADERS]
    assert df.loc[0, 'Name'] == 'John Doe'
    assert df.loc[0, 'Attendance'] == 'Yes'
    assert df.loc[0, 'Gift'] == 'Yes'
    assert df.loc[1, 'Lanyard'] == 'No'

def test_create_template_is_importable():
    success, errors, guests = ExcelService.parse_guests(ExcelService.create_template())

    assert success
    assert len(guests) == 2
    assert guests[0].category == 'Delegate'
