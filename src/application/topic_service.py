# src/application/topic_service.py

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List

from src.domain.errors import UnsupportedHighlightShape
from src.domain.interfaces import HighlightSourcePort
from src.domain.item_set import ItemSet
from src.domain.models import HighlightRecord


class TopicComparisonService:
    """
    Use case: confront the highlights filed under several topics.

    - union()        → every document of any topic, overlapping highlights merged
    - intersection() → documents present in every topic, keeping only the
                       highlights that overlap across all of them

    Topics are read from the source concurrently. A union does not depend on
    the order of topics. Each intersection step widens the surviving
    highlights, so topics are intersected in sorted id order whatever order
    the caller gives them in.
    """

    def __init__(
        self,
        source: HighlightSourcePort,
        max_workers: int = 4,
        skip_unsupported: bool = False,
    ):
        """
        Args:
            source:           Where documents and highlight records come from.
            max_workers:      Threads reading topics in parallel.
            skip_unsupported: Skip highlights with an unsupported shape instead
                              of failing the whole topic.
        """
        self._source = source
        self._max_workers = max_workers
        self._skip_unsupported = skip_unsupported

    def corpus_set(self, corpus_id: str) -> ItemSet:
        """Every document of a corpus, without highlights."""
        return ItemSet.from_documents(self._source.get_corpus_documents(corpus_id))

    def topic_set(self, topic_id: str) -> ItemSet:
        item_set = ItemSet.from_documents(self._source.get_topic_documents(topic_id))
        self._add_records(item_set, self._source.get_topic_highlights(topic_id))
        print(
            f"[TopicService] Topic '{topic_id}': {item_set.count_items()} items, "
            f"{item_set.count_highlights()} highlights."
        )
        return item_set

    def union(self, topic_ids: Iterable[str]) -> ItemSet:
        """
        Highlight records of all topics are fed into a single set by
        parallel producers, one per topic.
        """
        topic_ids = list(topic_ids)
        result = ItemSet()
        for topic_id in topic_ids:
            result.add_all(
                ItemSet.from_documents(self._source.get_topic_documents(topic_id))
            )

        def produce(topic_id: str) -> None:
            self._add_records(result, self._source.get_topic_highlights(topic_id))

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            # list() re-raises the first producer failure here.
            list(executor.map(produce, topic_ids))

        print(
            f"[TopicService] Union of {len(topic_ids)} topic(s): "
            f"{result.count_items()} items, {result.count_highlights()} highlights."
        )
        return result

    def intersection(self, topic_ids: Iterable[str]) -> ItemSet:
        # Fold order changes the widened result; sorted ids fix it.
        topic_ids = sorted(set(topic_ids))
        if not topic_ids:
            raise ValueError("Intersection needs at least one topic.")

        topic_sets = self._build_topic_sets(topic_ids)
        result = topic_sets[0]
        for other in topic_sets[1:]:
            result.retain_all(other)

        print(
            f"[TopicService] Intersection of {len(topic_ids)} topic(s): "
            f"{result.count_items()} items, {result.count_highlights()} highlights."
        )
        return result

    # ─── Private ─────────────────────────────────────────────────────────────

    def _build_topic_sets(self, topic_ids: List[str]) -> List[ItemSet]:
        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            return list(executor.map(self.topic_set, topic_ids))

    def _add_records(self, item_set: ItemSet, records: List[HighlightRecord]) -> None:
        for record in records:
            try:
                item_set.add_record(record)
            except UnsupportedHighlightShape as error:
                if not self._skip_unsupported:
                    raise
                print(
                    f"[TopicService] ⚠ Skipped highlight on '{record.parent_item_id}': {error}"
                )
