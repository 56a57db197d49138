"""
FEAST Recipe Tools - FastAPI Application
HTTP entry point the recipe agent uses to list and invoke tools
"""

import logging
from typing import Any

from fastapi import Body, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config import (
    CANDIDATE_POOL_SIZE,
    CORS_ORIGINS,
    DEFAULT_MAX_RESULTS,
    DEFAULT_MIN_MATCH_PERCENTAGE,
    MAX_FAVORITES_PER_USER,
    SPOONACULAR_API_KEY,
    SPOONACULAR_BASE_URL,
    SPOONACULAR_CACHE_TTL,
    SPOONACULAR_MAX_RETRIES,
    SPOONACULAR_RETRY_DELAY,
    SPOONACULAR_TIMEOUT,
    configure_logging,
)
from recipe_tools.errors import (
    ExternalCollaboratorFailure,
    InternalContractViolation,
    InvalidArgument,
    NotFound,
    ValidationError,
)
from recipe_tools.favorites import InMemoryFavoritesStore
from recipe_tools.registry import Dispatcher
from recipe_tools.spoonacular import SpoonacularAPI, SpoonacularRecipeSource
from recipe_tools.tools import build_registry

logger = logging.getLogger(__name__)

VERSION = "4.0.0"

STATUS_BY_CODE = {
    ValidationError.code: 422,
    InvalidArgument.code: 400,
    NotFound.code: 404,
    ExternalCollaboratorFailure.code: 502,
    InternalContractViolation.code: 500,
}


def create_dispatcher() -> Dispatcher:
    """Wire the collaborators from configuration"""
    api = SpoonacularAPI(
        api_key=SPOONACULAR_API_KEY,
        base_url=SPOONACULAR_BASE_URL,
        timeout=SPOONACULAR_TIMEOUT,
        max_retries=SPOONACULAR_MAX_RETRIES,
        retry_delay=SPOONACULAR_RETRY_DELAY,
        cache_ttl=SPOONACULAR_CACHE_TTL
    )
    registry = build_registry(
        recipe_source=SpoonacularRecipeSource(api),
        favorites_store=InMemoryFavoritesStore(max_per_user=MAX_FAVORITES_PER_USER),
        candidate_pool_size=CANDIDATE_POOL_SIZE,
        default_max_results=DEFAULT_MAX_RESULTS,
        default_min_match_percentage=DEFAULT_MIN_MATCH_PERCENTAGE
    )
    return Dispatcher(registry)


# Global dispatcher instance
dispatcher = create_dispatcher()


def get_dispatcher() -> Dispatcher:
    return dispatcher


# Initialize FastAPI app
app = FastAPI(
    title="FEAST Recipe Tools",
    description="Recipe lookup, ingredient search, favorites and unit conversion tools",
    version=VERSION
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class HealthResponse(BaseModel):
    status: str
    tool_count: int


# API Endpoints
@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "FEAST Recipe Tools are running",
        "version": VERSION,
        "backend": "Spoonacular"
    }


@app.get("/health", response_model=HealthResponse)
async def health_check(dispatcher: Dispatcher = Depends(get_dispatcher)):
    """Health check endpoint"""
    registry = dispatcher.registry
    return HealthResponse(
        status="healthy" if registry.frozen else "starting",
        tool_count=len(registry.names())
    )


@app.get("/tools")
async def list_tools(dispatcher: Dispatcher = Depends(get_dispatcher)):
    """Tool catalogue with input/output JSON schemas"""
    return dispatcher.registry.describe()


@app.post("/tools/{tool_name}")
async def invoke_tool(
    tool_name: str,
    payload: Any = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher)
):
    """Invoke a tool; failures come back as structured errors"""
    raw_input = {} if payload is None else payload
    result = await dispatcher.invoke_structured(tool_name, raw_input)
    if result.success:
        return JSONResponse(status_code=200, content=result.to_dict())

    status = STATUS_BY_CODE.get(result.error["code"], 500)
    logger.info("Tool %s failed with %s", tool_name, result.error["code"])
    return JSONResponse(status_code=status, content=result.to_dict())


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize on startup"""
    configure_logging()
    logger.info("FEAST Recipe Tools v%s started with %d tools", VERSION, len(dispatcher.registry.names()))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
