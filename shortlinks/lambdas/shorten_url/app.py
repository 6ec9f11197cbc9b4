import logging
import binascii

from shortlinks.types import LambdaEvent, LambdaContext, LambdaResponse
from shortlinks.dao.exceptions import DataStoreError
from shortlinks.exceptions import URLParseError
from shortlinks.lambdas.shared import get_shortener
from shortlinks.lambdas.pages import shortened_page, error_page
from shortlinks.utils import normalize_url, get_short_url, form_fields
from shortlinks.utils.helpers import guarantee_500_response
from shortlinks.lambdas.shorten_url.constants import (
    MISSING_URL,
    INVALID_FORM_BODY,
    INVALID_URL,
    DATA_STORE_ERROR,
    SHORTEN_SUCCESS,
)


logger = logging.getLogger(__name__)


def html_response(status_code: int, body: str) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'text/html; charset=utf-8'},
        'body': body,
    }


def response_400(message: str) -> LambdaResponse:
    return html_response(400, error_page(f'Bad Request ({message})'))


def response_500() -> LambdaResponse:
    return html_response(500, error_page('Internal Server Error'))


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle form submissions from the home page (POST /)

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract the URL (field 'u') from the form-encoded request body
    - Step 2: Shorten the URL and store the mapping
    - Step 3: Respond with a confirmation page

    HTTP responses:
        200: HTML page showing '<host>/r/<link id>' and the normalized target URL
        400: Missing field 'u', undecodable body or invalid URL
        500: Link store is unreachable or failed

    Args:
        event (LambdaEvent):
            API Gateway event payload; the body may be base64-encoded.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        LambdaResponse:
            API Gateway-compatible response with an HTML body.

    Example:
        >>> event = {'body': 'u=example.com', 'headers': {'Host': 'sho.rt'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
    """
    # 1- Extract URL from request body
    try:
        fields = form_fields(event)
    except (binascii.Error, UnicodeDecodeError):
        logger.info('Request body is not a valid form. Responding with 400.', extra={'event': INVALID_FORM_BODY})
        return response_400('invalid form body')

    url = (fields.get('u') or [''])[0].strip()
    if not url:
        logger.info("Missing 'u' in form body. Responding with 400.", extra={'event': MISSING_URL})
        return response_400("missing 'u' in form body")

    # 2- Shorten URL and store mapping
    try:
        target_url = normalize_url(url)
        link_id = get_shortener().post(target_url)
    except URLParseError as e:
        logger.info('Invalid URL submitted. Responding with 400.', extra={'url': url, 'event': INVALID_URL})
        return response_400(str(e))
    except DataStoreError:
        logger.exception('Failed to write to link store. Responding with 500.', extra={'event': DATA_STORE_ERROR})
        return response_500()

    # 3- Return confirmation page
    short_url = get_short_url(link_id, event)
    logger.info(
        'Shortened URL. Responding with 200.',
        extra={'linkId': link_id, 'shortUrl': short_url, 'event': SHORTEN_SUCCESS},
    )
    return html_response(200, shortened_page(short_url, target_url, url))
