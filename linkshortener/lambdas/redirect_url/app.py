import json
import logging
from typing import Any

from linkshortener.dao.exceptions import DataStoreError
from linkshortener.services import build_services, RedirectStatus, RequestContext
from linkshortener.utils import load_config, get_short_url, app_prefix
from linkshortener.utils.helpers import guarantee_500_response, request_header
from linkshortener.lambdas.redirect_url.constants import (
    MISSING_SHORTCODE,
    SHORT_LINK_NOT_FOUND,
    SHORT_LINK_EXPIRED,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


def response_400(message: str | None = None, error_code: str | None = None) -> dict:
    base = 'Bad Request'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': 400,
        'body': json.dumps(body),
    }


def response_404(message: str, error_code: str) -> dict:
    return {
        'statusCode': 404,
        'body': json.dumps({'message': f'Not Found ({message})', 'errorCode': error_code}),
    }


def response_410(message: str, error_code: str) -> dict:
    return {
        'statusCode': 410,
        'body': json.dumps({'message': f'Gone ({message})', 'errorCode': error_code}),
    }


def response_503(message: str, error_code: str) -> dict:
    return {
        'statusCode': 503,
        'body': json.dumps({'message': f'Service Unavailable ({message})', 'errorCode': error_code}),
    }


def response_302(*, location: str) -> dict:
    return {
        'statusCode': 302,
        'headers': {
            'Location': location,
            'Cache-Control': 'no-store',
        },
        'body': json.dumps({}),
    }


def request_context(event: dict[str, Any]) -> RequestContext:
    """Collect referrer, coarse locale and source path of a redirect request"""
    language = request_header(event, 'Accept-Language').split(',')[0].split(';')[0].strip()
    return RequestContext(
        referrer=request_header(event, 'Referer'),
        language=language,
        timezone=request_header(event, 'X-Timezone').strip(),
        source_path=request_header(event, 'X-Source-Path') or event.get('path') or '/',
    )


@guarantee_500_response
def lambda_handler(event: dict, context: Any) -> dict:
    """Handle incoming API Gateway requests to redirect short links

    This Lambda handler follows this procedure to redirect short links:
    - Step 1: Extract shortcode from request path
    - Step 2: Resolve the shortcode (records a click on success)
    - Step 3: Redirect client to the long URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: long URL of the link
        400: Bad client request
            message: missing shortcode in path parameters
        404: Not found
            message: no link with this shortcode exists
        410: Gone
            message: the link's validity window has ended
        503: Service unavailable
            errorCode: PERSISTENCE_ERROR when the data store failed
        500: Internal server error
            message: server experienced an internal error

    Args:
        event (dict):
            API Gateway event payload containing the shortcode path parameter.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        dict:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'shortcode': 'Gh71TCN'}, 'path': '/Gh71TCN'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 0- Get application's config
    app_config = load_config('redirect_url')

    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        logger.info(
            'Missing "shortcode" in path. Responding with 400.',
            extra={'event': MISSING_SHORTCODE},
        )
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)
    logger.debug('Client requested short URL %s.', get_short_url(shortcode, event))

    # 2- Resolve shortcode and record the click
    services = build_services(app_config, prefix=app_prefix())
    try:
        result = services.resolver.resolve(shortcode, request_context(event))
    except DataStoreError as error:
        logger.error(
            'Failed to resolve short link. Responding with 503.',
            extra={'shortcode': shortcode, 'event': error.error_code, 'error': str(error)},
        )
        return response_503(str(error), error.error_code)

    if result.status is RedirectStatus.NOT_FOUND:
        logger.info(
            'Short link not found. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_LINK_NOT_FOUND},
        )
        return response_404(f"short url {get_short_url(shortcode, event)} doesn't exist", SHORT_LINK_NOT_FOUND)

    if result.status is RedirectStatus.EXPIRED:
        logger.info(
            'Short link expired. Responding with 410.',
            extra={'shortcode': shortcode, 'event': SHORT_LINK_EXPIRED},
        )
        return response_410(f'short url {get_short_url(shortcode, event)} has expired', SHORT_LINK_EXPIRED)

    # 3- Redirect client to long URL
    logger.info(
        'Redirecting client to long URL. Responding with 302.',
        extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS},
    )
    return response_302(location=result.target)
