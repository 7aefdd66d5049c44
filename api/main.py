import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from answers import router as answers_router
from answers.repository import PostgresAnswersRepository
from core import db, errors, settings
from core.logging import configure_logging
from questions import router as questions_router
from questions.repository import PostgresQuestionsRepository

# Values already present in the environment win over `.env`.
load_dotenv()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level())

    # One pool per process, handed to each store explicitly.
    pool = await db.create_pool()
    app.state.pool = pool
    app.state.questions_repository = PostgresQuestionsRepository(pool)
    app.state.answers_repository = PostgresAnswersRepository(pool)
    logger.info("db_pool_ready max_size=%s", settings.pool_max_size())
    try:
        yield
    finally:
        await db.close_pool(pool)
        logger.info("db_pool_closed")


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

errors.register_error_handlers(app)

app.include_router(questions_router.router, tags=["questions"])
app.include_router(answers_router.router, tags=["answers"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
