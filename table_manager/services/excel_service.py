"""
Roster spreadsheet import/export
"""

import io
import logging
from typing import Dict, List, Optional, Tuple

import pandas as pd
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.orm import Session

from table_manager.core.db import storage_errors, transaction
from table_manager.core.errors import ValidationError
from table_manager.models import Party, Table
from table_manager.schemas.party import PartyCreate
from table_manager.services.event_service import EventService
from table_manager.services.party_service import generate_token
from table_manager.services.repositories import PartyRepo, TableRepo

logger = logging.getLogger(__name__)

class ExcelService:
    """Service for handling roster spreadsheets"""

    REQUIRED_COLUMNS = ['name']
    OPTIONAL_COLUMNS = ['email', 'phone', 'group', 'party size', 'table']
    EXPORT_COLUMNS = ['Name', 'Email', 'Phone', 'Group', 'Party Size', 'Table', 'Token']

    @staticmethod
    def create_template() -> bytes:
        """Create a roster template with the recognised columns"""
        df = pd.DataFrame(columns=['Name', 'Email', 'Phone', 'Group', 'Party Size', 'Table'])

        sample_data = [
            ['Lee Family', 'lee@example.com', '', 'Family', 4, 'A1'],
            ['Sam Ortiz', '', '555-0100', 'Friends', 1, ''],
        ]

        for row in sample_data:
            df.loc[len(df)] = row

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name='Guest List')

        return buffer.getvalue()

    @staticmethod
    def column_mapping(df: pd.DataFrame) -> Dict[str, str]:
        """Map canonical column keys to the sheet's own headers"""
        mapping = {}
        for col in df.columns:
            col_lower = str(col).lower().strip()
            if col_lower in ('party size', 'size', 'party_size'):
                mapping['party size'] = col
            elif col_lower in ('group', 'group name', 'group_name'):
                mapping['group'] = col
            elif col_lower in ExcelService.REQUIRED_COLUMNS + ExcelService.OPTIONAL_COLUMNS:
                mapping[col_lower] = col
        return mapping

    @staticmethod
    def validate_roster_structure(df: pd.DataFrame) -> Tuple[bool, List[str]]:
        """Check that the sheet carries the required columns"""
        errors = []
        mapping = ExcelService.column_mapping(df)

        missing_columns = [col for col in ExcelService.REQUIRED_COLUMNS if col not in mapping]
        if missing_columns:
            errors.append(f"Missing required columns: {', '.join(missing_columns)}")

        if df.empty:
            errors.append("File contains no data rows")

        return len(errors) == 0, errors

    @staticmethod
    def _cell(row: pd.Series, mapping: Dict[str, str], key: str) -> Optional[str]:
        if key not in mapping:
            return None
        value = row[mapping[key]]
        if pd.isna(value):
            return None
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        text = str(value).strip()
        return text or None

    @staticmethod
    def parse_rows(df: pd.DataFrame, tables: Dict[str, Table]) -> Tuple[List[Tuple[PartyCreate, int]], List[str]]:
        """Turn sheet rows into party payloads, collecting every row error"""
        mapping = ExcelService.column_mapping(df)
        parsed = []
        errors = []

        for index, row in df.iterrows():
            line = index + 2  # header is line 1
            name = ExcelService._cell(row, mapping, 'name')
            if not name:
                continue

            table_id = None
            table_name = ExcelService._cell(row, mapping, 'table')
            if table_name:
                table = tables.get(table_name)
                if table is None:
                    errors.append(f"Row {line}: unknown table '{table_name}'")
                    continue
                table_id = table.id

            size_text = ExcelService._cell(row, mapping, 'party size')
            try:
                party_size = int(float(size_text)) if size_text else 1
            except ValueError:
                errors.append(f"Row {line}: party size must be numeric")
                continue
            if party_size < 1:
                errors.append(f"Row {line}: party size must be at least 1")
                continue

            try:
                payload = PartyCreate(
                    name=name,
                    email=ExcelService._cell(row, mapping, 'email'),
                    phone=ExcelService._cell(row, mapping, 'phone'),
                    group_name=ExcelService._cell(row, mapping, 'group'),
                    party_size=party_size,
                    table_id=table_id,
                )
            except SchemaValidationError as e:
                errors.append(f"Row {line}: {e.errors()[0]['msg']}")
                continue

            parsed.append((payload, line))

        return parsed, errors

    @staticmethod
    @storage_errors()
    def import_roster(file_content: bytes, event_id: int, db: Session) -> List[Party]:
        """Add every party listed in the sheet, or none of them"""
        EventService.get_event_or_404(db, event_id)

        try:
            df = pd.read_excel(io.BytesIO(file_content))
        except Exception as e:
            raise ValidationError(f"Could not read spreadsheet: {e}") from e

        valid, errors = ExcelService.validate_roster_structure(df)
        if not valid:
            raise ValidationError("Spreadsheet validation failed", details=errors)

        tables = {table.table_name: table for table in TableRepo.list_for_event(db, event_id)}
        parsed, errors = ExcelService.parse_rows(df, tables)
        if errors:
            raise ValidationError("Spreadsheet validation failed", details=errors)
        if not parsed:
            raise ValidationError("Spreadsheet contains no parties")

        created = []
        with transaction(db):
            for payload, _ in parsed:
                party = Party(
                    event_id=event_id,
                    table_id=payload.table_id,
                    name=payload.name,
                    email=payload.email,
                    phone=payload.phone,
                    group_name=payload.group_name,
                    party_size=payload.party_size,
                    token=generate_token(db),
                )
                db.add(party)
                created.append(party)

        logger.info(f"Imported {len(created)} parties into event {event_id}")
        return created

    @staticmethod
    @storage_errors()
    def export_roster(event_id: int, db: Session) -> bytes:
        """Export the event's parties with their table and token"""
        EventService.get_event_or_404(db, event_id)

        data = [
            {
                'Name': party.name,
                'Email': party.email or '',
                'Phone': party.phone or '',
                'Group': party.group_name or '',
                'Party Size': party.party_size,
                'Table': table_name or '',
                'Token': party.token,
            }
            for party, table_name, _ in PartyRepo.list_with_table(db, event_id)
        ]

        df = pd.DataFrame(data, columns=ExcelService.EXPORT_COLUMNS)

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name='Guest List')

        return buffer.getvalue()
