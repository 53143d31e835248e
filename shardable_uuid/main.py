"""
FastAPI Shardable UUID Service

An HTTP front end for the shardable identifier generator. Identifiers carry a
shard slot, a timestamp, a caller-defined type and a per-(type, shard)
sequence, and can be decoded back into those fields without any lookup.

Key Features:
    - Identifier generation backed by atomic Redis sequence counters
    - Stateless parsing of identifier tokens
    - Administrative sequence reset per (type, shard)

Architecture:
    - FastAPI for the web framework and automatic API documentation
    - Redis for the per-(type, shard) sequence counters
    - ShardableUUID facade for packing, mixing and encoding identifiers
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Path, Response, status
from fastapi.middleware.cors import CORSMiddleware

from shardable_uuid.core.config import settings
from shardable_uuid.core.exceptions import (
    ClockRangeError,
    DecodeError,
    StoreOperationError,
    StoreUnavailableError,
    TypeRangeError,
)
from shardable_uuid.database import close_redis, connect_to_redis, get_redis_client
from shardable_uuid.database.schema import GeneratedUUID, ParsedUUID
from shardable_uuid.services.generator import ShardableUUID
from shardable_uuid.services.logger import setup_logger
from shardable_uuid.services.sequence import RedisSequenceCounter

logger = setup_logger()


def get_generator() -> ShardableUUID:
    """Build the generator on top of the global Redis client."""
    counter = RedisSequenceCounter(
        get_redis_client(),
        key_prefix=settings.SEQ_KEY_PREFIX,
    )
    return ShardableUUID(counter=counter, epoch=settings.EPOCH)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan event handler to initialize and close the Redis client.

    Args:
        app (FastAPI): The FastAPI application instance

    Yields:
        None: Control to the application during its lifetime
    """
    logger.info("Starting application and initializing Redis...")

    connect_to_redis()

    yield

    logger.info("Application is shutting down.")

    await close_redis()


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.post(
    "/uuid/{type_}",
    status_code=status.HTTP_201_CREATED,
    response_model=GeneratedUUID,
    summary="Generate an identifier",
    description="""
    Issue a new identifier for the given type.

    A shard slot is picked at random and the Redis sequence counter for
    (type, shard) is advanced atomically, so concurrent callers on the same
    slot never receive the same sequence value.
    """,
    responses={
        422: {
            "description": "Type outside 0-1023",
            "content": {
                "application/json": {
                    "example": {"detail": "Type must be between 0 and 1023, got 1024"}
                }
            },
        },
        503: {
            "description": "Sequence store unreachable",
            "content": {
                "application/json": {"example": {"detail": "Sequence store unavailable"}}
            },
        },
    },
)
async def generate_uuid(
    type_: int = Path(..., description="Caller-defined type (0-1023)", example=1),
    generator: ShardableUUID = Depends(get_generator),
):
    """Generate an identifier for ``type_``.

    Returns:
        GeneratedUUID: The token and the fields encoded in it.
    """
    try:
        return await generator.generate(type_)
    except TypeRangeError as e:
        logger.warning("Rejected type: %s", e)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    except StoreUnavailableError as e:
        logger.error("Identifier generation failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Sequence store unavailable",
        )
    except ClockRangeError as e:
        logger.error("Clock reading out of range: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Identifier generation failed",
        )
    except StoreOperationError as e:
        logger.error("Identifier generation failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Identifier generation failed",
        )


@app.get(
    "/uuid/{token}",
    response_model=ParsedUUID,
    summary="Parse an identifier",
    description="""
    Decode an identifier token back into its type, shard, sec, msec and seq.
    Parsing is pure computation and never touches Redis.
    """,
    responses={
        400: {
            "description": "Malformed token",
            "content": {
                "application/json": {"example": {"detail": "Malformed token: '!!'"}}
            },
        },
    },
)
async def parse_uuid(
    token: str = Path(..., description="Identifier token", example="gAAAAAAAAAAA"),
    generator: ShardableUUID = Depends(get_generator),
):
    """Parse an identifier token.

    Returns:
        ParsedUUID: The fields recovered from the token.
    """
    try:
        return generator.parse(token)
    except DecodeError as e:
        logger.warning("Rejected token: %s", e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@app.delete(
    "/seq/{type_}/{shard}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Reset a sequence counter",
    description="""
    Delete the sequence counter for (type, shard) so the next identifier on
    that slot gets sequence 0. Must not run concurrently with generation on
    the same slot.
    """,
)
async def reset_seq(
    type_: int = Path(..., description="Caller-defined type (0-1023)"),
    shard: int = Path(..., description="Shard slot (0-1023)"),
    generator: ShardableUUID = Depends(get_generator),
):
    try:
        await generator.reset_seq(type_, shard)
    except TypeRangeError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    except StoreUnavailableError as e:
        logger.error("Sequence reset failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Sequence store unavailable",
        )
    except StoreOperationError as e:
        logger.error("Sequence reset failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Sequence reset failed",
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)
