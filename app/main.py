import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.v1.bookings import router as bookings_router
from app.core.config import settings
from app.wiring.dependencies import close_email_sender

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("reference", "scope", "ip", "postcode", "district", "total", "reason", "error"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_email_sender()


app = FastAPI(title=f"{settings.BUSINESS_NAME} Booking API", version="1.0.0", lifespan=lifespan)

app.include_router(bookings_router, tags=["bookings"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
