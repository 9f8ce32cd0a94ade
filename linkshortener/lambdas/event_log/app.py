import json
import logging
from typing import Any

from linkshortener.dao.exceptions import DataStoreError
from linkshortener.services import build_services
from linkshortener.utils import load_config, app_prefix
from linkshortener.utils.helpers import guarantee_500_response
from linkshortener.lambdas.event_log.constants import METHOD_NOT_ALLOWED, EVENT_LOG_READ, EVENT_LOG_CLEARED


logger = logging.getLogger(__name__)


def response_200(body: dict) -> dict:
    return {
        'statusCode': 200,
        'headers': {'Content-Type': 'application/json'},
        'body': json.dumps(body),
    }


def response_405(method: str) -> dict:
    return {
        'statusCode': 405,
        'headers': {'Allow': 'GET, DELETE'},
        'body': json.dumps({'message': f'Method Not Allowed ({method})', 'errorCode': METHOD_NOT_ALLOWED}),
    }


def response_503(message: str, error_code: str) -> dict:
    return {
        'statusCode': 503,
        'body': json.dumps({'message': f'Service Unavailable ({message})', 'errorCode': error_code}),
    }


@guarantee_500_response
def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Read (GET) or clear (DELETE) the diagnostic event log

    HTTP responses:
        200: GET returns `entries`, most recent first; DELETE returns `cleared: true`
        405: Any other HTTP method
        503: Data store failure (PERSISTENCE_ERROR)
        500: Internal server error
    """
    method = (event.get('httpMethod') or 'GET').upper()
    if method not in ('GET', 'DELETE'):
        logger.info('Unsupported method %s. Responding with 405.', method, extra={'event': METHOD_NOT_ALLOWED})
        return response_405(method)

    app_config = load_config('event_log')
    services = build_services(app_config, prefix=app_prefix())

    try:
        if method == 'DELETE':
            services.event_log.clear()
            logger.info('Cleared event log.', extra={'event': EVENT_LOG_CLEARED})
            return response_200({'cleared': True})

        entries = services.event_log.read()
    except DataStoreError as error:
        logger.error('Event log unavailable. Responding with 503.', extra={'event': error.error_code})
        return response_503(str(error), error.error_code)

    logger.info('Responding with %s event log entries.', len(entries), extra={'event': EVENT_LOG_READ})
    return response_200({'count': len(entries), 'entries': [entry.to_dict() for entry in entries]})
