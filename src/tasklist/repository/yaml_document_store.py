# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from pathlib import Path
from typing import Optional

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from tasklist.model.entity_id import EntityId, generate_entity_id
from tasklist.repository.document_store import Document, DocumentStore, StoreError

logger = logging.getLogger(__name__)


class YamlDocumentStore(DocumentStore):
    """
    Document store keeping one `<id>.yaml` file per document in a directory.

    Files are replaced atomically, so a reader never sees a half-written
    document. Another process writing to the same directory is picked up by
    refresh().
    """

    def __init__(self, directory: Path) -> None:
        super().__init__()
        self.directory = directory
        self._documents: Optional[dict[EntityId, Document]] = None

    @property
    def _cache(self) -> dict[EntityId, Document]:
        if self._documents is None:
            self._documents = self.__load_data()
        return self._documents

    def __load_data(self) -> dict[EntityId, Document]:
        documents: dict[EntityId, Document] = {}
        if not self.directory.is_dir():
            return documents
        for file_path in sorted(self.directory.iterdir()):
            if file_path.suffix != ".yaml":
                continue
            try:
                raw_document = load(file_path.read_text(), Loader=Loader)
            except (OSError, YAMLError) as e:
                raise StoreError(f"cannot read {file_path.name}: {e}") from e
            if raw_document is None:
                continue
            if not isinstance(raw_document, dict) or "id" not in raw_document:
                raise StoreError(f"malformed document {file_path.name}")
            documents[raw_document["id"]] = raw_document
        logger.debug("Loaded %s documents from %s", len(documents), self.directory)
        return documents

    def __document_path(self, id: EntityId) -> Path:
        return self.directory / f"{id}.yaml"

    def __write(self, document: Document) -> None:
        file_path = self.__document_path(document["id"])
        temp_path = file_path.with_suffix(".yaml.tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(dump(document, Dumper=Dumper))
            temp_path.replace(file_path)
        except OSError as e:
            raise StoreError(f"cannot write {file_path.name}: {e}") from e

    def documents(self) -> list[Document]:
        return deepcopy(list(self._cache.values()))

    def add(self, data: Document) -> EntityId:
        id = generate_entity_id()
        document = deepcopy(data)
        document["id"] = id
        self.__write(document)
        self._cache[id] = document
        logger.debug("Added document %s", id)
        self._publish()
        return id

    def update(self, id: EntityId, fields: Document) -> None:
        if id not in self._cache:
            raise StoreError(f"no document with id {id}")
        document = deepcopy(self._cache[id])
        document.update(deepcopy(fields))
        document["id"] = id
        self.__write(document)
        self._cache[id] = document
        logger.debug("Updated document %s fields=%s", id, sorted(fields))
        self._publish()

    def delete(self, id: EntityId) -> None:
        if id not in self._cache:
            raise StoreError(f"no document with id {id}")
        try:
            self.__document_path(id).unlink()
        except OSError as e:
            raise StoreError(f"cannot delete {id}: {e}") from e
        del self._cache[id]
        logger.debug("Deleted document %s", id)
        self._publish()

    def refresh(self) -> bool:
        """
        Re-read the directory and publish if the collection changed on disk.

        Returns True when subscribers were notified.
        """
        previous = self._documents
        try:
            self._documents = self.__load_data()
        except StoreError as e:
            logger.exception("Refreshing %s failed", self.directory)
            for subscription in list(self._subscriptions):
                subscription.fail(e)
            return True
        if previous == self._documents:
            return False
        self._publish()
        return True
