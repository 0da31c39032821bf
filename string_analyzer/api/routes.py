from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from http import HTTPStatus
from typing import Optional
import logging

from string_analyzer import config
from string_analyzer.schemas.string import (
    StringCreate,
    StringResource,
    StringListResponse,
    NaturalLanguageResponse,
    InterpretedQuery,
)
from string_analyzer.services.analyzer import build_resource
from string_analyzer.services.filters import clean_filters
from string_analyzer.services.nl_parser import parse_natural_language_query
from string_analyzer.store import StringStore, StringAlreadyExistsError, StringNotFoundError

router = APIRouter()
logger = logging.getLogger(__name__)


def get_store(request: Request) -> StringStore:
    """Dependency to provide the configured string store."""
    return request.app.state.store


def api_error(status_code: int, message: str) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={
            "status": status_code,
            "error": HTTPStatus(status_code).phrase,
            "message": message
        }
    )


def limit_param():
    return Query(
        config.DEFAULT_PAGE_LIMIT,
        ge=1,
        le=config.MAX_PAGE_LIMIT,
        description=f"Page size (1-{config.MAX_PAGE_LIMIT})"
    )


def offset_param():
    return Query(0, ge=0, description="Number of matching strings to skip")


@router.post("/strings", response_model=StringResource, status_code=status.HTTP_201_CREATED)
def create_string(string_data: StringCreate, store: StringStore = Depends(get_store)):
    """
    Analyze and store a string.
    Returns 409 if string already exists.
    """
    if store.exists(string_data.value):
        raise api_error(status.HTTP_409_CONFLICT, "String already exists in the system")

    resource = build_resource(string_data.value)
    try:
        store.create(resource)
    except StringAlreadyExistsError as e:
        # lost a race with a concurrent create of the same value
        raise api_error(status.HTTP_409_CONFLICT, str(e))

    logger.info(f"String created: id={resource.id}")
    return resource


@router.get("/strings", response_model=StringListResponse)
@router.get("/strings/list", response_model=StringListResponse)
def list_strings(
    is_palindrome: Optional[bool] = Query(None),
    min_length: Optional[int] = Query(None, ge=0),
    max_length: Optional[int] = Query(None, ge=0),
    word_count: Optional[int] = Query(None, ge=0),
    contains_character: Optional[str] = Query(None, min_length=1, max_length=1),
    limit: int = limit_param(),
    offset: int = offset_param(),
    store: StringStore = Depends(get_store)
):
    """
    Get stored strings with optional filtering and pagination.
    `count` is the number of matches before pagination.
    """
    filters = clean_filters({
        "is_palindrome": is_palindrome,
        "min_length": min_length,
        "max_length": max_length,
        "word_count": word_count,
        "contains_character": contains_character,
    })

    if filters:
        logger.info(f"Listing strings with filters={filters} limit={limit} offset={offset}")
    else:
        logger.info(f"Listing all strings limit={limit} offset={offset}")

    data, count = store.list(filters, limit, offset)
    return StringListResponse(data=data, count=count, filters_applied=filters)


@router.get("/strings/filter-by-natural-language", response_model=NaturalLanguageResponse)
def filter_by_natural_language(
    query: str = Query(..., description="Natural language query"),
    limit: int = limit_param(),
    offset: int = offset_param(),
    store: StringStore = Depends(get_store)
):
    """
    Filter strings using natural language queries.
    Example: "all single word palindromic strings"
    """
    if not query.strip():
        raise api_error(status.HTTP_400_BAD_REQUEST, "Missing required query parameter: query")

    filters = parse_natural_language_query(query)
    logger.info(f"Parsed natural language query {query!r} into {filters}")

    data, count = store.list(filters, limit, offset)
    return NaturalLanguageResponse(
        data=data,
        count=count,
        interpreted_query=InterpretedQuery(original=query, parsed_filters=filters)
    )


@router.get("/strings/{string_value:path}", response_model=StringResource)
def get_string(string_value: str, store: StringStore = Depends(get_store)):
    """
    Get analysis for a specific string.
    Returns 404 if string doesn't exist.
    """
    try:
        return store.get(string_value)
    except StringNotFoundError as e:
        raise api_error(status.HTTP_404_NOT_FOUND, str(e))


@router.delete("/strings/{string_value:path}", status_code=status.HTTP_204_NO_CONTENT)
def delete_string(string_value: str, store: StringStore = Depends(get_store)):
    """
    Delete a string from the system.
    Returns 404 if string doesn't exist.
    """
    try:
        store.delete(string_value)
    except StringNotFoundError as e:
        raise api_error(status.HTTP_404_NOT_FOUND, str(e))

    logger.info(f"String deleted: {string_value!r}")
    return None
