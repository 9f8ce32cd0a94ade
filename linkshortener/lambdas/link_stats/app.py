import json
import logging
from typing import Any

from linkshortener.dao.exceptions import DataStoreError
from linkshortener.models import ShortLinkModel
from linkshortener.services import build_services
from linkshortener.utils import load_config, get_short_url, app_prefix, utcnow
from linkshortener.utils.helpers import guarantee_500_response
from linkshortener.lambdas.link_stats.constants import STATS_SUCCESS


logger = logging.getLogger(__name__)


def response_200(body: dict) -> dict:
    return {
        'statusCode': 200,
        'headers': {'Content-Type': 'application/json'},
        'body': json.dumps(body),
    }


def response_503(message: str, error_code: str) -> dict:
    return {
        'statusCode': 503,
        'body': json.dumps({'message': f'Service Unavailable ({message})', 'errorCode': error_code}),
    }


def link_stats(link: ShortLinkModel, event: dict[str, Any], now) -> dict[str, Any]:
    data = link.to_dict()
    return {
        'shortcode': link.shortcode,
        'shortUrl': get_short_url(link.shortcode, event),
        'longUrl': link.long_url,
        'createdAt': data['createdAt'],
        'expireAt': data['expireAt'],
        'expired': link.is_expired(now),
        'totalClicks': link.total_clicks,
        'clicks': data['clicks'],
    }


@guarantee_500_response
def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Return statistics for stored short links

    An optional `q` query string parameter restricts the result to links whose
    shortcode contains it.

    HTTP responses:
        200: Link statistics
            links: shortcode, URLs, timestamps, expired flag, total clicks and click details
        503: Data store failure (PERSISTENCE_ERROR)
        500: Internal server error
    """
    app_config = load_config('link_stats')
    query = ((event.get('queryStringParameters') or {}).get('q') or '').strip()

    services = build_services(app_config, prefix=app_prefix())
    try:
        links = services.store.filter(query)
    except DataStoreError as error:
        logger.error('Failed to load short links. Responding with 503.', extra={'event': error.error_code})
        return response_503(str(error), error.error_code)

    now = utcnow()
    logger.info('Responding with stats for %s link(s).', len(links), extra={'event': STATS_SUCCESS, 'query': query})
    return response_200({'query': query, 'count': len(links), 'links': [link_stats(link, event, now) for link in links]})
