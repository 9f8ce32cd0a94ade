from linkshortener.models import ClickEventModel, ShortLinkModel
from linkshortener.services.link_store import LinkStore


class ClickRecorder:
    """Append click events to the click history of stored links."""

    def __init__(self, store: LinkStore):
        self.store = store

    def append(self, link: ShortLinkModel, event: ClickEventModel) -> ShortLinkModel:
        """Prepend `event` to the clicks of `link` and persist it

        The click is applied to the currently stored version of the link, so
        clicks recorded concurrently are not lost.

        Returns:
            ShortLinkModel: the updated link; no other field changes.

        Raises:
            ShortLinkNotFoundError: If the link was purged in the meantime.
            DataStoreError: If the collection could not be persisted.
        """
        return self.store.modify(link.id, lambda current: current.with_click(event))
