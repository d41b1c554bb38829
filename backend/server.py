"""Slim entry point – wires up all modular routers."""
from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware
import logging

from config import CORS_ORIGINS, LOG_LEVEL
from routes.public import router as public_router
from routes.balun import router as balun_router
from routes.inductor import router as inductor_router
from services.catalog import build_reference_data

# ── Logging ──
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Balun & Choke Designer")

# ── Route routers (all prefixed with /api) ──
app.include_router(public_router, prefix="/api")
app.include_router(balun_router, prefix="/api")
app.include_router(inductor_router, prefix="/api")

# ── CORS ──
app.add_middleware(
    CORSMiddleware,
    allow_credentials=True,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Lifecycle ──
@app.on_event("startup")
async def startup_load_reference_data():
    data = build_reference_data()
    logger.info(f"Serving {len(data.cores)} core models, {len(data.coax_cables)} coax types")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("server:app", host="0.0.0.0", port=8001)
