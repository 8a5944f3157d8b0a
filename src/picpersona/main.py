import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .config import CORS_ORIGINS, LOG_LEVEL
from .routes.health import router as health_router
from .routes.analyze import router as analyze_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(title="PicPersona Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount routers (prefixes matter!)
app.include_router(health_router, prefix="/api")
app.include_router(analyze_router, prefix="/api")
