import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.auth.users import bootstrap_admin
from backend.core import config
from backend.core.errors import http_exception_handler, validation_exception_handler
from backend.database import SessionLocal, init_db, utcnow
from backend.routes import admin_routes, auth_routes, chord_note_routes, recording_routes, song_routes

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)

app = FastAPI(title="Musician's Companion API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials='*' not in config.CORS_ALLOW_ORIGINS,
    allow_methods=['*'],
    allow_headers=['*'],
)

app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

logger = logging.getLogger(__name__)


@app.middleware('http')
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info('%s %s -> %s (%.1f ms)', request.method, request.url.path, response.status_code, elapsed_ms)
    return response


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        init_db()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL.')
        return

    if not config.ADMIN_EMAIL:
        return
    db = SessionLocal()
    try:
        bootstrap_admin(
            db,
            email=config.ADMIN_EMAIL,
            password=config.ADMIN_PASSWORD,
            name=config.ADMIN_NAME,
        )
    except SQLAlchemyError:
        db.rollback()
        logger.exception('Administrator bootstrap failed.')
    finally:
        db.close()


@app.get('/api/ping')
def ping():
    return {'status': 'active', 'timestamp': utcnow()}


app.include_router(auth_routes.router, prefix='/api/auth')
app.include_router(song_routes.router, prefix='/api/songs')
app.include_router(recording_routes.router, prefix='/api/recordings')
app.include_router(chord_note_routes.router, prefix='/api/chords')
app.include_router(admin_routes.router, prefix='/api/admin')
