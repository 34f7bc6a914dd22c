"""
FastAPI application entry point.

Serves story beat and inspiration kit generation backed by OpenAI.
The provider is created once at startup and injected into handlers.
"""

from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from src import __version__
from src.infra.config import load_config
from src.infra.logging_config import setup_logging
from src.story.model_provider import create_provider
from .dependencies.auth import verify_api_key
from .dependencies.providers import get_provider
from .errors import http_exception_handler, validation_exception_handler
from .routers import inspiration, story
from .schemas.common import HealthResponse

load_dotenv()
settings = load_config()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup: configure logging, build the provider.
    Shutdown: close the provider's HTTP client.
    """
    logger = setup_logging(settings.log_level, settings.log_dir)
    app.state.config = settings
    app.state.provider = create_provider(settings)
    logger.info(f"[API] StoryWeaver {__version__} started (provider={app.state.provider.provider_name})")

    yield

    await app.state.provider.close()
    app.state.provider = None
    app.state.config = None
    logger.info("[API] Shutdown complete")


tags_metadata = [
    {
        "name": "story",
        "description": "Interactive story beats - continue, branch and genre-shift a co-authored story",
    },
    {
        "name": "inspiration",
        "description": "Inspiration kits - text spark, image and audio cue for a creative theme",
    },
]

app = FastAPI(
    title="StoryWeaver API",
    lifespan=lifespan,
    description="""
## StoryWeaver API

Co-author an interactive story with a generative AI mentor and craft
multimedia inspiration kits.

### Authentication
When `API_AUTH_ENABLED=true`, `/story` and `/inspiration` require an
`X-API-Key` header matching the `API_KEY` environment variable.

### Errors
Every error response has the shape `{"error": "<message>"}`:
400 for missing or invalid request fields, 500 for generation failures.

### Usage
```bash
uvicorn src.api.main:app --host 127.0.0.1 --port 8000

curl -X POST http://localhost:8000/story \\
  -H "Content-Type: application/json" \\
  -d '{"mode": "start", "currentGenre": "Noir Mystery", "userIntent": "A detective who forgets every case"}'
```
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=tags_metadata,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint. Not authenticated."""
    return {"status": "ok", "version": __version__}


@app.get("/provider/status")
async def provider_status(provider=Depends(get_provider)):
    """
    Report provider name, configured models and whether a credential is set.

    Never includes the credential itself. Not authenticated.
    """
    return provider.status()


app.include_router(
    story.router, prefix="/story", tags=["story"], dependencies=[Depends(verify_api_key)]
)
app.include_router(
    inspiration.router, prefix="/inspiration", tags=["inspiration"], dependencies=[Depends(verify_api_key)]
)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000)
