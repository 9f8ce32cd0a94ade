"""Wire services for a lambda invocation from the loaded configuration."""

from dataclasses import dataclass
from typing import Any

from linkshortener.dao.base import EventLogBaseDAO
from linkshortener.dao.factory import short_link_dao, event_log_dao
from linkshortener.services.link_store import LinkStore
from linkshortener.services.redirect_resolver import RedirectResolver
from linkshortener.utils.config import LinkSettings, link_settings
from linkshortener.utils.shortener import CodeGenerator


@dataclass(frozen=True)
class Services:
    settings: LinkSettings
    event_log: EventLogBaseDAO
    store: LinkStore
    resolver: RedirectResolver


def build_services(app_config: dict[str, Any], prefix: str | None = None) -> Services:
    settings = link_settings(app_config)
    event_log = event_log_dao(app_config, settings, prefix=prefix)
    store = LinkStore(
        short_link_dao(app_config, settings, prefix=prefix),
        event_log,
        generator=CodeGenerator(length=settings.shortcode_length),
        settings=settings,
    )
    return Services(settings=settings, event_log=event_log, store=store, resolver=RedirectResolver(store))
