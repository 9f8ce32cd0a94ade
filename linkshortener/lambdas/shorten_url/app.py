import json
import logging
from typing import Any

from linkshortener.dao.exceptions import DataStoreError
from linkshortener.exceptions import ValidationError, ExhaustedCodeSpaceError
from linkshortener.models import LinkDraft
from linkshortener.services import build_services
from linkshortener.utils import load_config, get_short_url, app_prefix
from linkshortener.utils.helpers import guarantee_500_response
from linkshortener.lambdas.shorten_url.constants import INVALID_JSON, MISSING_LINKS, SHORTEN_SUCCESS


logger = logging.getLogger(__name__)


def response_200(body: dict) -> dict:
    return {
        'statusCode': 200,
        'headers': {'Content-Type': 'application/json'},
        'body': json.dumps(body),
    }


def response_400(message: str | None = None, error_code: str | None = None, row: int | None = None) -> dict:
    base = 'Bad Request'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    if row is not None:
        body['row'] = row
    return {
        'statusCode': 400,
        'body': json.dumps(body),
    }


def response_503(message: str, error_code: str) -> dict:
    return {
        'statusCode': 503,
        'body': json.dumps({'message': f'Service Unavailable ({message})', 'errorCode': error_code}),
    }


def parse_drafts(request_body: Any) -> list[LinkDraft] | None:
    """Extract link drafts from a request body

    Accepts either `{"links": [{...}, ...]}` or a single link object. Returns
    None if the body contains no link objects at all.
    """
    if not isinstance(request_body, dict):
        return None

    if 'links' in request_body:
        rows = request_body['links']
    elif 'long_url' in request_body:
        rows = [request_body]
    else:
        return None

    if not isinstance(rows, list) or not rows or not all(isinstance(row, dict) for row in rows):
        return None

    return [
        LinkDraft(
            long_url=str(row.get('long_url') or '').strip(),
            validity_minutes=row.get('validity'),
            shortcode=row.get('shortcode'),
        )
        for row in rows
    ]


@guarantee_500_response
def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract link drafts from request body
    - Step 2: Validate and store all drafts in one transaction
    - Step 3: Respond to user with the created links

    HTTP responses:
        200: Successful URL shortening
            links: created links with their short URLs
        400: Bad client request
            message: cause of the bad request
            errorCode: INVALID_JSON, MISSING_LINKS, INVALID_BATCH_SIZE, INVALID_URL,
                       INVALID_VALIDITY, INVALID_SHORTCODE or SHORTCODE_COLLISION
            row: 1-based index of the rejected link (validation errors only)
        503: Service unavailable
            message: no free shortcode could be generated, or the links could not be persisted
            errorCode: EXHAUSTED_CODE_SPACE or PERSISTENCE_ERROR
        500: Internal server error
            message: indicate the server experienced an internal error

    Args:
        event (Dict[str, Any]):
            API Gateway event payload in Lambda Proxy format.
        context (Any):
            AWS Lambda context object containing runtime information.

    Returns:
        Dict[str, Any]:
            JSON-serializable response following API Gateway Lambda Proxy
            output format. Includes status code, headers, and response body.

    Example:
        >>> event = {'body': '{"links": [{"long_url": "https://example.com", "validity": 10}]}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['links'][0]['minutes']
        10
    """
    # 0- Get application's config
    app_config = load_config('shorten_url')

    # 1- Extract link drafts from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON)

    drafts = parse_drafts(request_body)
    if drafts is None:
        logger.info('No links in request body. Responding with 400.', extra={'event': MISSING_LINKS})
        return response_400(message="missing 'links' in JSON body", error_code=MISSING_LINKS)

    # 2- Validate and store all drafts
    services = build_services(app_config, prefix=app_prefix())
    try:
        links = services.store.insert_many(drafts)
    except ValidationError as error:
        logger.info(
            'Link draft rejected. Responding with 400.',
            extra={'event': error.error_code, 'row': error.row, 'reason': error.reason},
        )
        return response_400(message=str(error), error_code=error.error_code, row=error.row)
    except ExhaustedCodeSpaceError as error:
        logger.warning('Shortcode space exhausted. Responding with 503.', extra={'event': error.error_code})
        return response_503(str(error), error.error_code)
    except DataStoreError as error:
        logger.error(
            'Failed to persist short links. Responding with 503.',
            extra={'event': error.error_code, 'error': str(error)},
        )
        return response_503(str(error), error.error_code)

    # 3- Return created links to user
    logger.info('Shortened %s link(s). Responding with 200.', len(links), extra={'event': SHORTEN_SUCCESS})
    return response_200(
        {
            'message': f'Successfully shortened {len(links)} link(s)',
            'links': [
                {
                    **link.to_dict(),
                    'shortUrl': get_short_url(link.shortcode, event),
                    'minutes': int((link.expire_at - link.created_at).total_seconds() // 60),
                }
                for link in links
            ],
        }
    )
