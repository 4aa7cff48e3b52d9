"""JSON response helpers shared by the controllers."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any

from flask import jsonify, request

from ..core.exceptions import ConflictError, NotFoundError, ObjectNotFoundError, ValidationError

logger = logging.getLogger(__name__)


def error_response(message: Any, status: int):
    return jsonify({"error": message}), status


def read_json() -> Any:
    """Request body as parsed JSON.

    An empty body reads as ``{}``; a malformed one as None, which validation
    then reports as a shape error.
    """
    if not request.get_data():
        return {}
    return request.get_json(force=True, silent=True)


def json_errors(failure_message: str):
    """Map domain errors raised by a view to JSON error responses.

    Anything unexpected is logged with its traceback and answered with a
    generic 500 so no internal detail leaks to the client.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return error_response([v.to_json() for v in e.violations], 400)
            except (NotFoundError, ObjectNotFoundError) as e:
                return error_response(str(e), 404)
            except ConflictError as e:
                return error_response(str(e), 409)
            except Exception:
                logger.exception("%s: %s %s", failure_message, request.method, request.path)
                return error_response(failure_message, 500)

        return wrapper

    return decorator
