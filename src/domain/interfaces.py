# src/domain/interfaces.py

from abc import ABC, abstractmethod
from typing import List

from .models import DocumentRecord, HighlightRecord


class HighlightSourcePort(ABC):
    """
    Port for any store of documents and topic highlights.
    Item sets are built from what it returns; it never sees an ItemSet.
    """

    @abstractmethod
    def get_corpus_documents(self, corpus_id: str) -> List[DocumentRecord]: ...

    @abstractmethod
    def get_topic_documents(self, topic_id: str) -> List[DocumentRecord]: ...

    @abstractmethod
    def get_topic_highlights(self, topic_id: str) -> List[HighlightRecord]:
        """
        Highlights filed under a topic. Their parent documents may be missing
        from get_topic_documents() for the same topic.
        """
        ...

    @abstractmethod
    def list_topics(self) -> List[str]: ...
