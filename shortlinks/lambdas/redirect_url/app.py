import json
import logging

from shortlinks.types import LambdaEvent, LambdaContext, LambdaResponse
from shortlinks.dao.exceptions import ShortLinkNotFoundError, DataStoreError
from shortlinks.exceptions import URLParseError
from shortlinks.lambdas.shared import get_shortener
from shortlinks.utils import normalize_url, get_short_url, link_id_from_event
from shortlinks.utils.helpers import guarantee_500_response
from shortlinks.lambdas.redirect_url.constants import (
    MISSING_LINK_ID,
    LINK_NOT_FOUND,
    DATA_STORE_ERROR,
    INVALID_STORED_URL,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    base = 'Internal Server Error'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': 500,
        'body': json.dumps(body),
    }


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    base = 'Bad Request'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': 400,
        'body': json.dumps(body),
    }


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    base = 'Not Found'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': 404,
        'body': json.dumps(body),
    }


def response_301(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 301,
        'headers': {'Location': location},
        'body': '',
    }


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect short links

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract link id from the final segment of the request path
    - Step 2: Look up the stored URL
    - Step 3: Redirect client to target URL

    HTTP responses:
        301: Successful redirect
            headers:
                Location: target URL destination
        400: Bad client request
            message: missing link id in path
        404: Not found
            message: link id is unknown or expired
        500: Internal server error
            message: link store is unreachable or failed

    Args:
        event (LambdaEvent):
            API Gateway event payload, e.g. with 'path': '/r/3f9a0c1e'.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        LambdaResponse:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'path': '/r/3f9a0c1e'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        301
        >>> response['headers']['Location']
        'http://example.com/my-page'
    """
    # 1- Extract link id from request's path
    link_id = link_id_from_event(event)
    if link_id is None:
        logger.info(
            'Missing link id in path. Responding with 400.',
            extra={'event': MISSING_LINK_ID},
        )
        return response_400(message='missing link id in path', error_code=MISSING_LINK_ID)
    logger.debug('Client requested short URL %s.', get_short_url(link_id, event))

    # 2- Look up the stored URL
    try:
        target_url = get_shortener().get(link_id)
    except ShortLinkNotFoundError:
        logger.info(
            'Short link not found in link store. Responding with 404.',
            extra={'linkId': link_id, 'event': LINK_NOT_FOUND},
        )
        return response_404(message=f"short url {get_short_url(link_id, event)} doesn't exist", error_code=LINK_NOT_FOUND)
    except DataStoreError:
        logger.exception(
            'Failed to read from link store. Responding with 500.',
            extra={'linkId': link_id, 'event': DATA_STORE_ERROR},
        )
        return response_500(error_code=DATA_STORE_ERROR)

    try:
        location = normalize_url(target_url)
    except URLParseError:
        logger.exception(
            'Stored URL is not a valid URL. Responding with 500.',
            extra={'linkId': link_id, 'event': INVALID_STORED_URL},
        )
        return response_500(error_code=INVALID_STORED_URL)

    # 3- Redirect client to target URL
    logger.info(
        'Redirecting client to target URL. Responding with 301.',
        extra={'linkId': link_id, 'event': REDIRECT_SUCCESS},
    )
    return response_301(location=location)
