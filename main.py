from fastapi import FastAPI, Depends, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from typing import Any, Optional
from contextlib import asynccontextmanager
import uvicorn
from dotenv import load_dotenv
import logging

# Load environment variables from .env file
load_dotenv()

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

from chatbot import (
    InvalidQueryError,
    QueryDispatcher,
    QueryProcessingError,
    QueryResult,
    UnauthorizedError,
    answer_query,
)
from mongo.client import direct_mongo_client
from mongo.queries import mongo_scope
from rbac import CallerContext, get_current_caller


class ChatbotRequest(BaseModel):
    # Validated by answer_query so a bad message maps to 400, not 422
    message: Optional[Any] = None


dispatcher = QueryDispatcher(scope=mongo_scope)


def get_dispatcher() -> QueryDispatcher:
    return dispatcher


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage the lifespan of the FastAPI application"""
    # Startup
    try:
        await direct_mongo_client.connect()
    except Exception as e:
        # Reads reconnect lazily, so the API still comes up
        logger.error(f"MongoDB not connected at startup: {e}")
    yield

    # Shutdown
    await direct_mongo_client.disconnect()

# Create FastAPI app
app = FastAPI(
    title="Project Tracker Chatbot API",
    description="Read-only conversational queries over projects, tasks and employees",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": "Invalid request"})


@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "connected": direct_mongo_client.connected}


@app.post("/api/chatbot", response_model=QueryResult, response_model_exclude_none=True)
async def chatbot_query(
    request: ChatbotRequest,
    caller: CallerContext = Depends(get_current_caller),
    query_dispatcher: QueryDispatcher = Depends(get_dispatcher),
):
    """Answer a free-text question about the caller's projects, tasks and employees"""
    try:
        return await answer_query(request.message, caller.user_id, query_dispatcher)
    except UnauthorizedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except InvalidQueryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except QueryProcessingError as e:
        raise HTTPException(status_code=500, detail=str(e))


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
        )
