from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from typing import Any, Dict

from app.core.logger import logger
from app.services.booking_store import BookingStore, StoreError
from app.services.validation import validate_booking

router = APIRouter()

def get_booking_store(request: Request) -> BookingStore:
    """The store handle opened in the app lifespan."""
    return request.app.state.booking_store

async def _read_payload(request: Request) -> Any:
    # Malformed JSON is validated like an empty object
    try:
        return await request.json()
    except ValueError:
        return {}

@router.post(
    "/bookings",
    summary="Add a new booking",
    description="This endpoint adds a new booking to the MongoDB database.",
    responses={
        200: {"description": "Booking added successfully"},
        400: {"description": "Invalid input"},
        500: {"description": "Store insert failed"},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {
                    "schema": {
                        "type": "object",
                        "properties": {
                            "pickuplocation": {"type": "string"},
                            "dropofflocation": {"type": "string"},
                            "vantype": {"type": "string", "enum": ["Small", "Medium", "Large"]},
                            "deliverytime": {"type": "string", "format": "date-time"},
                        },
                        "required": ["pickuplocation", "dropofflocation", "vantype", "deliverytime"],
                    }
                }
            },
        }
    },
)
async def create_booking(
    request: Request,
    store: BookingStore = Depends(get_booking_store),
) -> Dict[str, Any]:
    payload = await _read_payload(request)

    result = validate_booking(payload)
    if not result.ok:
        logger.debug(f"Booking rejected: {[e.field for e in result.errors]}")
        return JSONResponse(
            status_code=400,
            content={"errors": [e.model_dump() for e in result.errors]},
        )

    try:
        booking = await store.create(result.booking)
    except StoreError as e:
        logger.error(f"❌ Error adding booking: {e}")
        return JSONResponse(
            status_code=500,
            content={"msg": "Internal server error", "error": e.to_dict()},
        )

    logger.info(f"✅ Booking added: {booking.id} ({booking.vantype}, {booking.deliverytime.isoformat()})")
    return {"msg": "Success", "booking": booking.model_dump(mode="json")}
