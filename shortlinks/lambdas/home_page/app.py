import logging

from shortlinks.types import LambdaEvent, LambdaContext, LambdaResponse
from shortlinks.lambdas.pages import home_page
from shortlinks.utils.helpers import guarantee_500_response
from shortlinks.lambdas.home_page.constants import HOME_PAGE_SERVED


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Serve the URL submission form (GET /)

    HTTP responses:
        200: HTML page with a form posting field 'u' to '/'
    """
    logger.debug('Serving home page.', extra={'event': HOME_PAGE_SERVED})
    return {
        'statusCode': 200,
        'headers': {'Content-Type': 'text/html; charset=utf-8'},
        'body': home_page(),
    }
