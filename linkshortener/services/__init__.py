from linkshortener.services.link_store import LinkStore, PurgeResult
from linkshortener.services.click_recorder import ClickRecorder
from linkshortener.services.redirect_resolver import RedirectResolver, RedirectResult, RedirectStatus, RequestContext
from linkshortener.services.clipboard import copy_short_url
from linkshortener.services.container import Services, build_services


__all__ = [
    'LinkStore',
    'PurgeResult',
    'ClickRecorder',
    'RedirectResolver',
    'RedirectResult',
    'RedirectStatus',
    'RequestContext',
    'copy_short_url',
    'Services',
    'build_services',
]
