"""
Translation of use case results into HTTP outcomes.
"""

import logging
from typing import Any, Dict

from fastapi import HTTPException, status

from buildtrack.application.use_cases.base_use_case import UseCaseResult


logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: Dict[str, int] = {
    "ENTITY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "DUPLICATE_ENTITY": status.HTTP_400_BAD_REQUEST,
    "BUSINESS_RULE_VIOLATION": status.HTTP_409_CONFLICT,
}


def unwrap(result: UseCaseResult) -> Any:
    """
    Return the data of a successful result or raise the matching HTTPException.
    The exception detail is the JSON body sent to the client.
    """
    if result.success:
        return result.data

    status_code = ERROR_STATUS_CODES.get(result.error_code)
    if status_code is None:
        logger.error(f"Request failed with {result.error_code}: {result.error}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": "Server error", "error": result.error}
        )

    detail: Dict[str, Any] = {"message": result.error}
    metadata = result.metadata or {}
    if metadata.get("field"):
        detail["field"] = metadata["field"]
    if metadata.get("details"):
        detail["details"] = metadata["details"]

    raise HTTPException(status_code=status_code, detail=detail)
