from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from app.core.config import settings
from app.api import bookings
from app.core.logger import setup_logging, logger
from app.services.booking_store import MongoBookingStore, SchemaCheckedStore
from contextlib import asynccontextmanager
from datetime import datetime

setup_logging()

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("🚀 Starting booking API")
    mongo_store = MongoBookingStore.from_settings(settings)
    await mongo_store.ensure_schema()
    app.state.booking_store = SchemaCheckedStore(mongo_store)
    yield
    # Shutdown
    await app.state.booking_store.close()
    logger.info("🛑 Shutting down booking API")

app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    lifespan=lifespan,
    # Swagger UI lives on the same path as the endpoint it documents
    docs_url=f"{settings.API_PREFIX}/bookings",
    redoc_url=None,
)

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.opt(exception=exc).error(f"🔥 UNHANDLED ERROR: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={"msg": "Internal server error"}
    )

app.include_router(bookings.router, prefix=settings.API_PREFIX, tags=["Bookings"])

@app.get("/")
async def health_check():
    return {'status': 'active', 'time': datetime.now().isoformat()}

@app.get("/health")
async def health_check_std():
    return {"status": "ok", "environment": settings.ENVIRONMENT, "timestamp": datetime.now().isoformat()}

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Server starting on port {settings.PORT}")
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT)
