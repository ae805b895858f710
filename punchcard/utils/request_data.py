"""
Request body helpers.
"""
from typing import Any, Dict
from flask import request

from .exceptions import ValidationError


def get_json_object() -> Dict[str, Any]:
    """
    Return the JSON request body as a dict.

    A missing or unparseable body reads as {} so field validation reports
    what is missing.

    Raises:
        ValidationError: Body is JSON but not an object (array, string, number)
    """
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data
