"""
Admin API routes - building and editing a seating plan
"""

from fastapi import APIRouter, Depends, UploadFile, File
from fastapi.responses import Response
from sqlalchemy.orm import Session

from table_manager.core.config import settings
from table_manager.core.db import get_db
from table_manager.core.errors import ValidationError
from table_manager.schemas.event import EventCreate, EventUpdate, EventTimesUpdate, LayoutImageUpdate, EventResponse
from table_manager.schemas.table import BulkTablesRequest, TableUpdate, TablePosition, TableResponse
from table_manager.schemas.party import PartyCreate, PartyUpdate, PartyAssign, PartyResponse
from table_manager.schemas.seat import SeatClaim, SeatAssignmentResponse
from table_manager.schemas.icon import IconCreate, IconPosition, IconResponse
from table_manager.services.event_service import EventService
from table_manager.services.layout_service import LayoutService
from table_manager.services.party_service import PartyService
from table_manager.services.seating_service import SeatingService
from table_manager.services.excel_service import ExcelService
from table_manager.utils.responses import success_response

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# ==================== EVENTS ====================

@router.post("/events")
async def create_event(event_data: EventCreate, db: Session = Depends(get_db)):
    """Create a new event"""
    event = EventService.create_event(
        db,
        name=event_data.name,
        event_date=event_data.date,
        venue=event_data.venue,
        start_time=event_data.start_time,
        end_time=event_data.end_time,
    )
    return success_response(
        message="Event created successfully",
        data=EventResponse.model_validate(event),
        status_code=201
    )

@router.get("/events")
async def list_events(db: Session = Depends(get_db)):
    """List events, most recent first"""
    events = EventService.list_events(db)
    return success_response(
        message="Events retrieved",
        data=[EventResponse.model_validate(event) for event in events]
    )

@router.get("/events/{event_id}")
async def get_event(event_id: int, db: Session = Depends(get_db)):
    """Get event with statistics"""
    return success_response(
        message="Event details retrieved",
        data=EventService.get_event(db, event_id)
    )

@router.put("/events/{event_id}")
async def update_event(event_id: int, event_data: EventUpdate, db: Session = Depends(get_db)):
    event = EventService.update_event(
        db,
        event_id,
        name=event_data.name,
        event_date=event_data.date,
        venue=event_data.venue,
        start_time=event_data.start_time,
        end_time=event_data.end_time,
    )
    return success_response(
        message="Event updated successfully",
        data=EventResponse.model_validate(event)
    )

@router.put("/events/{event_id}/times")
async def update_event_times(event_id: int, times: EventTimesUpdate, db: Session = Depends(get_db)):
    event = EventService.update_times(db, event_id, times.start_time, times.end_time)
    return success_response(
        message="Event times updated",
        data=EventResponse.model_validate(event)
    )

@router.put("/events/{event_id}/layout-image")
async def update_layout_image(event_id: int, payload: LayoutImageUpdate, db: Session = Depends(get_db)):
    event = EventService.set_layout_image(db, event_id, payload.layout_image)
    return success_response(
        message="Layout image updated",
        data={"id": event.id, "layout_image": event.layout_image}
    )

@router.delete("/events/{event_id}")
async def delete_event(event_id: int, db: Session = Depends(get_db)):
    """Delete an event and everything attached to it"""
    EventService.delete_event(db, event_id)
    return success_response(
        message="Event deleted successfully",
        data={"deleted_event_id": event_id}
    )

# ==================== TABLES ====================

@router.post("/events/{event_id}/tables")
async def create_tables(event_id: int, payload: BulkTablesRequest, db: Session = Depends(get_db)):
    """Create tables in bulk (all or nothing)"""
    tables = LayoutService.bulk_create_tables(db, event_id, payload.tables)
    return success_response(
        message=f"{len(tables)} tables created successfully",
        data={
            "created": len(tables),
            "tables": [TableResponse.model_validate(table) for table in tables]
        },
        status_code=201
    )

@router.get("/events/{event_id}/tables")
async def list_tables(event_id: int, db: Session = Depends(get_db)):
    return success_response(
        message="Tables retrieved",
        data=LayoutService.list_tables(db, event_id)
    )

@router.put("/tables/{table_id}")
async def update_table(table_id: int, table_data: TableUpdate, db: Session = Depends(get_db)):
    table = LayoutService.update_table(db, table_id, table_data)
    return success_response(
        message="Table updated successfully",
        data=TableResponse.model_validate(table)
    )

@router.put("/tables/{table_id}/position")
async def reposition_table(table_id: int, position: TablePosition, db: Session = Depends(get_db)):
    LayoutService.reposition_table(db, table_id, position.position_x, position.position_y)
    return success_response(message="Position updated successfully")

@router.delete("/tables/{table_id}")
async def delete_table(table_id: int, db: Session = Depends(get_db)):
    LayoutService.delete_table(db, table_id)
    return success_response(message="Table deleted successfully")

@router.delete("/events/{event_id}/layout")
async def clear_layout(event_id: int, db: Session = Depends(get_db)):
    """Remove every table and icon of an event"""
    LayoutService.clear_layout(db, event_id)
    return success_response(message="Layout cleared successfully")

# ==================== PARTIES ====================

@router.post("/events/{event_id}/parties")
async def add_party(event_id: int, party_data: PartyCreate, db: Session = Depends(get_db)):
    party = PartyService.add_party(db, event_id, party_data)
    return success_response(
        message="Party added successfully",
        data=PartyResponse.model_validate(party),
        status_code=201
    )

@router.get("/events/{event_id}/parties")
async def list_parties(event_id: int, db: Session = Depends(get_db)):
    return success_response(
        message="Parties retrieved",
        data=PartyService.list_parties(db, event_id)
    )

@router.put("/parties/{party_id}")
async def update_party(party_id: int, party_data: PartyUpdate, db: Session = Depends(get_db)):
    PartyService.update_party(db, party_id, party_data)
    return success_response(message="Party updated successfully")

@router.put("/parties/{party_id}/assign")
async def reassign_party(party_id: int, assignment: PartyAssign, db: Session = Depends(get_db)):
    PartyService.reassign_party(db, party_id, assignment.table_id)
    return success_response(message="Party assigned successfully")

@router.delete("/parties/{party_id}")
async def delete_party(party_id: int, db: Session = Depends(get_db)):
    PartyService.delete_party(db, party_id)
    return success_response(message="Party deleted successfully")

@router.post("/events/{event_id}/parties/upload")
async def upload_roster(event_id: int, file: UploadFile = File(...), db: Session = Depends(get_db)):
    """Import parties from a spreadsheet"""
    if not file.filename or not file.filename.endswith(('.xlsx', '.xls')):
        raise ValidationError("Invalid file format. Please upload an Excel file (.xlsx or .xls)")

    file_content = await file.read()
    if len(file_content) > settings.MAX_UPLOAD_SIZE:
        raise ValidationError("File is too large")

    parties = ExcelService.import_roster(file_content, event_id, db)
    return success_response(
        message=f"{len(parties)} parties imported",
        data={"created": len(parties), "filename": file.filename},
        status_code=201
    )

@router.get("/events/{event_id}/parties/export.xlsx")
async def export_roster(event_id: int, db: Session = Depends(get_db)):
    content = ExcelService.export_roster(event_id, db)
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename=guest_list_{event_id}.xlsx"}
    )

# ==================== SEATS ====================

@router.post("/tables/{table_id}/seats")
async def claim_seat(table_id: int, claim: SeatClaim, db: Session = Depends(get_db)):
    assignment = SeatingService.claim_seat(
        db,
        table_id,
        claim.seat_number,
        claim.party_id,
        claim.member_number,
    )
    return success_response(
        message="Seat assigned successfully",
        data=SeatAssignmentResponse.model_validate(assignment)
    )

@router.get("/tables/{table_id}/seats")
async def list_seats(table_id: int, db: Session = Depends(get_db)):
    return success_response(
        message="Seats retrieved",
        data=SeatingService.list_seats(db, table_id)
    )

@router.delete("/tables/{table_id}/seats/{seat_number}")
async def release_seat(table_id: int, seat_number: int, db: Session = Depends(get_db)):
    SeatingService.release_seat(db, table_id, seat_number)
    return success_response(message="Seat assignment removed")

# ==================== ICONS ====================

@router.post("/events/{event_id}/icons")
async def add_icon(event_id: int, icon_data: IconCreate, db: Session = Depends(get_db)):
    icon = LayoutService.add_icon(db, event_id, icon_data)
    return success_response(
        message="Icon added successfully",
        data=IconResponse.model_validate(icon),
        status_code=201
    )

@router.get("/events/{event_id}/icons")
async def list_icons(event_id: int, db: Session = Depends(get_db)):
    icons = LayoutService.list_icons(db, event_id)
    return success_response(
        message="Icons retrieved",
        data=[IconResponse.model_validate(icon) for icon in icons]
    )

@router.put("/icons/{icon_id}/position")
async def reposition_icon(icon_id: int, position: IconPosition, db: Session = Depends(get_db)):
    LayoutService.reposition_icon(db, icon_id, position.position_x, position.position_y)
    return success_response(message="Icon position updated")

@router.delete("/icons/{icon_id}")
async def delete_icon(icon_id: int, db: Session = Depends(get_db)):
    LayoutService.delete_icon(db, icon_id)
    return success_response(message="Icon deleted successfully")
