"""
Excel processing service for guest data import/export
"""

import io
from typing import Any, Dict, List, Optional, Tuple
import pandas as pd

from app.schemas.guest import GuestRecord

class ExcelService:
    """Service for handling Excel operations"""

    REQUIRED_COLUMNS = ['name']

    # Normalized header -> GuestRecord field
    TEXT_COLUMNS = {
        'name': 'name',
        'email': 'email',
        'phone number': 'phone_number',
        'phone': 'phone_number',
        'company name': 'company_name',
        'company': 'company_name',
        'category': 'category',
        'amount': 'amount',
        'remarks': 'remarks',
        'payment mode': 'payment_mode',
    }
    FLAG_COLUMNS = {
        'attendance': 'attending',
        'attending': 'attending',
        'lanyard': 'has_lanyard',
        'gift': 'has_gift',
        'food coupon': 'has_food_coupon',
    }
    EXPORT_HEADERS = [
        ('Name', 'name'),
        ('Email', 'email'),
        ('Phone Number', 'phone_number'),
        ('Company Name', 'company_name'),
        ('Category', 'category'),
        ('Amount', 'amount'),
        ('Remarks', 'remarks'),
        ('Payment Mode', 'payment_mode'),
        ('Attendance', 'attending'),
        ('Lanyard', 'has_lanyard'),
        ('Gift', 'has_gift'),
        ('Food Coupon', 'has_food_coupon'),
    ]
    TRUE_VALUES = {'yes', 'y', 'true', '1'}
    SHEET_NAME = 'Guests'

    @staticmethod
    def create_template() -> bytes:
        """Create Excel template with the import columns"""
        df = pd.DataFrame(columns=['Name', 'Email', 'Phone Number', 'Company Name', 'Category'])

        sample_data = [
            ['Sample Guest 1', 'guest1@example.com', '5550001', 'Acme', 'Delegate'],
            ['Sample Guest 2', 'guest2@example.com', '5550002', 'Globex', 'VIP'],
        ]

        for row in sample_data:
            df.loc[len(df)] = row

        return ExcelService._to_xlsx(df)

    @staticmethod
    def column_mapping(df: pd.DataFrame) -> Dict[str, str]:
        """Map GuestRecord fields to the sheet's actual column labels"""
        mapping = {}
        for col in df.columns:
            col_lower = str(col).lower().strip()
            field = ExcelService.TEXT_COLUMNS.get(col_lower) or ExcelService.FLAG_COLUMNS.get(col_lower)
            if field and field not in mapping:
                mapping[field] = col
        return mapping

    @staticmethod
    def validate_excel_structure(df: pd.DataFrame) -> Tuple[bool, List[str]]:
        """Validate Excel file structure"""
        errors = []

        mapping = ExcelService.column_mapping(df)
        missing_columns = [col for col in ExcelService.REQUIRED_COLUMNS if col not in mapping]

        if missing_columns:
            errors.append(f"Missing required columns: {', '.join(missing_columns)}")

        return len(errors) == 0, errors

    @staticmethod
    def cell_text(value: Any) -> str:
        """Render a cell as text; integral numbers lose their decimal part"""
        if value is None or (not isinstance(value, str) and pd.isna(value)):
            return ''
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value).strip()

    @staticmethod
    def cell_flag(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        return ExcelService.cell_text(value).lower() in ExcelService.TRUE_VALUES

    @staticmethod
    def parse_guests(file_content: bytes) -> Tuple[bool, List[str], List[GuestRecord]]:
        """Read guests from the first sheet; rows with a blank name are skipped"""
        try:
            df = pd.read_excel(io.BytesIO(file_content))
        except Exception as e:
            return False, [f"Error reading Excel file: {str(e)}"], []

        valid_structure, structure_errors = ExcelService.validate_excel_structure(df)
        if not valid_structure:
            return False, structure_errors, []

        mapping = ExcelService.column_mapping(df)
        guests = []

        for _, row in df.iterrows():
            name = ExcelService.cell_text(row[mapping['name']])
            if not name:
                continue

            data: Dict[str, Optional[Any]] = {}
            for field, col in mapping.items():
                if field in ExcelService.FLAG_COLUMNS.values():
                    data[field] = ExcelService.cell_flag(row[col])
                elif field in ('category', 'amount', 'remarks', 'payment_mode'):
                    data[field] = ExcelService.cell_text(row[col]) or None
                else:
                    data[field] = ExcelService.cell_text(row[col])

            guests.append(GuestRecord(**data))

        return True, [], guests

    @staticmethod
    def export_guests(guests: List[GuestRecord]) -> bytes:
        """Export guests to Excel, flags as Yes/No"""
        data = []
        for guest in guests:
            row = {}
            for header, field in ExcelService.EXPORT_HEADERS:
                value = getattr(guest, field)
                if isinstance(value, bool):
                    value = 'Yes' if value else 'No'
                row[header] = value if value is not None else ''
            data.append(row)

        df = pd.DataFrame(data, columns=[header for header, _ in ExcelService.EXPORT_HEADERS])
        return ExcelService._to_xlsx(df)

    @staticmethod
    def _to_xlsx(df: pd.DataFrame) -> bytes:
        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name=ExcelService.SHEET_NAME)
        return buffer.getvalue()
