"""Helper utilities for AWS lambda functions.

Functions:
    request_host() -> str
        Extract the public host of the current request from an API Gateway event
    get_short_url() -> str
        Get string representation of the short URL for a given link id
    link_id_from_event() -> str | None
        Extract the link id (final path segment) from an API Gateway event
    form_fields() -> dict[str, list[str]]
        Decode a form-encoded request body
    guarantee_500_response(func) -> Callable
        Decorator: Turn unexpected handler exceptions into HTTP 500 responses

Example:
    Typical usage inside a Lambda handler:

        >>> from shortlinks.utils.helpers import get_short_url
        >>> event = {'headers': {'Host': 'sho.rt'}}
        >>> get_short_url('3f9a0c1e', event)
        'sho.rt/r/3f9a0c1e'
"""

import json
import base64
import logging
import posixpath
import functools
from typing import Any
from collections.abc import Callable
from urllib.parse import parse_qs

from shortlinks.utils.constants import REDIRECT_PATH, UNKNOWN_INTERNAL_SERVER_ERROR


logger = logging.getLogger(__name__)


def request_host(event: dict[str, Any]) -> str:
    """Extract the public host of the request from an API Gateway event

    The Host header wins over the API Gateway domain name so that custom
    domains and local gateways report the address the client actually used.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: host (with port, if any), e.g.:
             - "sho.rt"
             - "localhost:3000" (fallback for local invocations)
    """
    headers = {k.lower(): v for k, v in (event.get('headers') or {}).items()}
    if headers.get('host'):
        return headers['host']

    domain = (event.get('requestContext') or {}).get('domainName', '')
    return domain or 'localhost:3000'


def get_short_url(link_id: str, event: dict[str, Any]) -> str:
    """Get string representation of a short URL, e.g. 'sho.rt/r/3f9a0c1e'

    Args:
        link_id (str): link id
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: short url string representation (no scheme)
    """
    return f'{request_host(event).rstrip("/")}/{REDIRECT_PATH}/{link_id}'


def link_id_from_event(event: dict[str, Any]) -> str | None:
    """Extract the link id from an API Gateway event

    The link id is the final segment of the request path, e.g. '/r/3f9a0c1e'
    gives '3f9a0c1e'. REST (`path`) and HTTP (`rawPath`) API payloads are
    supported; `pathParameters.id` is used when no path is present.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str | None: link id, or None if the path ends with '/' or is missing.
    """
    path = event.get('path') or event.get('rawPath')
    if path:
        return posixpath.basename(path) or None
    return (event.get('pathParameters') or {}).get('id') or None


def form_fields(event: dict[str, Any]) -> dict[str, list[str]]:
    """Decode an application/x-www-form-urlencoded request body

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        dict[str, list[str]]: form fields (empty values are kept).

    Raises:
        ValueError: If a base64-encoded body cannot be decoded.
    """
    body = event.get('body') or ''
    if event.get('isBase64Encoded'):
        body = base64.b64decode(body, validate=True).decode('utf-8')
    return parse_qs(body, keep_blank_values=True)


def guarantee_500_response(func: Callable) -> Callable:
    """Decorator ensuring a Lambda handler always produces an HTTP response.

    Any exception escaping the handler is logged and converted into a JSON
    500 response.

    Example:
        >>> @guarantee_500_response
        ... def lambda_handler(event, context):
        ...     raise RuntimeError('boom')
        >>> lambda_handler({}, None)['statusCode']
        500
    """

    @functools.wraps(func)
    def wrapper(event: dict[str, Any], context: Any, *args, **kwargs) -> dict[str, Any]:
        try:
            return func(event, context, *args, **kwargs)
        except Exception:
            logger.exception(
                'Unhandled exception in Lambda handler. Responding with 500.',
                extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR},
            )
            return {
                'statusCode': 500,
                'body': json.dumps(
                    {
                        'message': 'Internal Server Error',
                        'errorCode': UNKNOWN_INTERNAL_SERVER_ERROR,
                    }
                ),
            }

    return wrapper
