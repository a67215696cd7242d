# SPDX-License-Identifier: MIT

from abc import ABC, abstractmethod
from copy import deepcopy
from typing import Any, Callable, Optional, Self, TypeAlias

from tasklist.model.entity_id import EntityId

Document: TypeAlias = dict[str, Any]
SnapshotCallback: TypeAlias = Callable[[list[Document]], None]
ErrorCallback: TypeAlias = Callable[["StoreError"], None]


class StoreError(Exception):
    pass


def order_documents(
    documents: list[Document], order_by: str, descending: bool = False
) -> list[Document]:
    none_documents = [document for document in documents if document.get(order_by) is None]
    value_documents = [
        document for document in documents if document.get(order_by) is not None
    ]
    value_documents.sort(key=lambda document: document[order_by], reverse=descending)
    return value_documents + none_documents


class Subscription:
    """
    Handle for one live query on a document store.

    The subscriber receives the whole ordered collection on every change.
    Releasing the handle is idempotent, and once released no callback is
    delivered again, even one already queued by the store.
    """

    def __init__(
        self,
        store: "DocumentStore",
        order_by: str,
        descending: bool,
        on_snapshot: SnapshotCallback,
        on_error: ErrorCallback,
    ) -> None:
        self._store = store
        self.order_by = order_by
        self.descending = descending
        self._on_snapshot = on_snapshot
        self._on_error = on_error
        self.active = True

    def deliver(self, documents: list[Document]) -> None:
        if not self.active:
            return
        self._on_snapshot(
            order_documents(deepcopy(documents), self.order_by, self.descending)
        )

    def fail(self, error: StoreError) -> None:
        if not self.active:
            return
        self._on_error(error)

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self.active = False
        self._store._remove_subscription(self)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.unsubscribe()


class DocumentStore(ABC):
    """
    A collection of documents keyed by id, with live subscriptions.

    Writes are whole-document from the subscriber's point of view: a partial
    update merges the given fields and publishes the new collection once.
    """

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    @abstractmethod
    def documents(self) -> list[Document]: ...

    @abstractmethod
    def add(self, data: Document) -> EntityId: ...

    @abstractmethod
    def update(self, id: EntityId, fields: Document) -> None: ...

    @abstractmethod
    def delete(self, id: EntityId) -> None: ...

    def get(self, id: EntityId) -> Optional[Document]:
        for document in self.documents():
            if document["id"] == id:
                return document
        return None

    def subscribe(
        self,
        order_by: str,
        on_snapshot: SnapshotCallback,
        on_error: ErrorCallback,
        descending: bool = False,
    ) -> Subscription:
        subscription = Subscription(self, order_by, descending, on_snapshot, on_error)
        self._subscriptions.append(subscription)
        try:
            documents = self.documents()
        except StoreError as e:
            subscription.fail(e)
        else:
            subscription.deliver(documents)
        return subscription

    @property
    def subscription_count(self) -> int:
        return len(self._subscriptions)

    def _remove_subscription(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def _publish(self) -> None:
        if not self._subscriptions:
            return
        try:
            documents = self.documents()
        except StoreError as e:
            for subscription in list(self._subscriptions):
                subscription.fail(e)
            return
        for subscription in list(self._subscriptions):
            subscription.deliver(documents)
