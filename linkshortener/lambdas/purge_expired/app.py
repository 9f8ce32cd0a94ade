import json
import logging
from typing import Any

from linkshortener.dao.exceptions import DAOError
from linkshortener.services import build_services, PurgeResult
from linkshortener.utils import load_config, app_prefix
from linkshortener.lambdas.purge_expired.constants import SUCCESS, ERROR


logger = logging.getLogger(__name__)


def response_success(*, result: PurgeResult) -> str:
    return json.dumps(
        {
            'status': SUCCESS,
            'removed': result.removed_count,
            'before': result.before,
            'after': result.after,
            'message': f'Purged {result.removed_count} expired link(s)',
        }
    )


def response_error(*, error: Exception) -> str:
    return json.dumps(
        {
            'status': ERROR,
            'message': 'Failed to purge expired links',
            'reason': str(error),
            'error': error.__class__.__name__,
        }
    )


def lambda_handler(event: dict, context: Any) -> str:
    """Remove every expired short link from the store

    Invoked on a schedule by EventBridge.

    Diagnostic responses:
        success:
            status: success
            removed: <number of removed links>
            before: <collection size before the purge>
            after: <collection size after the purge>
        error:
            status: error
            message: Failed to purge expired links
            reason: <reason>
            error: <error class name> (e.g. DataStoreError)

    Args:
        event (dict):
            EventBridge event payload.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        str:
            JSON-encoded diagnostic response.
    """
    try:
        app_config = load_config('purge_expired')
        services = build_services(app_config, prefix=app_prefix())
        result = services.store.purge_expired()
    except DAOError as error:
        logger.exception(
            'Failed to purge expired links.',
            extra={'event': ERROR, 'reason': str(error), 'error': error.__class__.__name__},
        )
        return response_error(error=error)
    else:
        logger.info(
            'Purged %s expired link(s).',
            result.removed_count,
            extra={'event': SUCCESS, 'before': result.before, 'after': result.after},
        )
        return response_success(result=result)
