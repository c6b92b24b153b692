# src/infrastructure/memory_source.py

from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from src.domain.interfaces import HighlightSourcePort
from src.domain.models import DocumentRecord, HighlightRecord


class InMemoryHighlightSource(HighlightSourcePort):
    """
    Source backed by plain dictionaries.

    - corpora: { corpus_id: [document_id, ...] }
    - topics:  { topic_id: [document_id, ...] }  documents filed under a topic
    - topic_highlights: { topic_id: [HighlightRecord, ...] }

    Highlight records are returned with their parent document attached
    whenever the document is known.
    """

    def __init__(
        self,
        documents: Iterable[DocumentRecord],
        corpora: Optional[Dict[str, List[str]]] = None,
        topics: Optional[Dict[str, List[str]]] = None,
        topic_highlights: Optional[Dict[str, List[HighlightRecord]]] = None,
    ):
        self._documents: Dict[str, DocumentRecord] = {d.id: d for d in documents}
        self._corpora = corpora or {}
        self._topics = topics or {}
        self._topic_highlights = topic_highlights or {}

    def get_corpus_documents(self, corpus_id: str) -> List[DocumentRecord]:
        if corpus_id not in self._corpora:
            raise KeyError(f"Unknown corpus: '{corpus_id}'")
        return self._resolve(self._corpora[corpus_id])

    def get_topic_documents(self, topic_id: str) -> List[DocumentRecord]:
        self._check_topic(topic_id)
        return self._resolve(self._topics.get(topic_id, []))

    def get_topic_highlights(self, topic_id: str) -> List[HighlightRecord]:
        self._check_topic(topic_id)
        return [
            replace(record, parent=self._documents.get(record.parent_item_id))
            if record.parent is None else record
            for record in self._topic_highlights.get(topic_id, [])
        ]

    def list_topics(self) -> List[str]:
        return sorted(set(self._topics) | set(self._topic_highlights))

    # ─── Private ─────────────────────────────────────────────────────────────

    def _check_topic(self, topic_id: str) -> None:
        if topic_id not in self._topics and topic_id not in self._topic_highlights:
            raise KeyError(f"Unknown topic: '{topic_id}'")

    def _resolve(self, document_ids: List[str]) -> List[DocumentRecord]:
        # Ids without a known document are skipped, as a partial listing.
        return [self._documents[i] for i in document_ids if i in self._documents]
