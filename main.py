import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from db import init_db

# Routers
from routers.admin import router as admin_router
from routers.attempts import router as attempts_router
from routers.equation import router as equation_router
from routers.health import router as health_router
from routers.marking import router as marking_router
from routers.problems import router as problems_router

logger = logging.getLogger("formula-flipper")
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())

CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if o.strip()
]

init_db()

app = FastAPI(title="Formula Flipper – Rearrangement API")

# Allow calls from the drill client
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*", "x-api-key", "x-admin-token"],
)


@app.get("/")
def health_root():
    return {"ok": True}


app.include_router(equation_router)  # /equation/...
app.include_router(marking_router)  # /check-answer, /submit
app.include_router(problems_router)  # /problems/...
app.include_router(attempts_router)  # /attempts/...
app.include_router(admin_router)  # /admin/...
app.include_router(health_router)  # /health/...
