# jobportal/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobportal import config
from jobportal.database import Base, engine
from jobportal import models  # noqa: F401  registers every table on Base.metadata
from jobportal.middleware import log_requests, register_exception_handlers
from jobportal.routes import (
    application_routes,
    auth_routes,
    company_routes,
    dashboard_routes,
    employer_routes,
    job_board_routes,
    job_routes,
    job_seeker_routes,
)

config.configure_logging()
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)

app = FastAPI(title="Job Portal Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(log_requests)
register_exception_handlers(app)


@app.get("/")
def root():
    return {"message": "Job portal backend is running!"}


@app.get("/health")
def health():
    return {"status": "ok", "environment": config.ENVIRONMENT}


app.include_router(auth_routes.router)
app.include_router(employer_routes.router)
app.include_router(company_routes.router)
app.include_router(dashboard_routes.router)
app.include_router(job_routes.router)
app.include_router(job_seeker_routes.router)
app.include_router(job_board_routes.router)
app.include_router(application_routes.router)

logger.info("Job portal started (environment=%s)", config.ENVIRONMENT)
