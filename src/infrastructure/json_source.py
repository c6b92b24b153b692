# src/infrastructure/json_source.py

import json
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from src.domain.models import DocumentRecord, HighlightRecord
from src.infrastructure.memory_source import InMemoryHighlightSource


# ── Dump schema ───────────────────────────────────────────────────────────────
#
# {
#   "documents": [{"id": "...", "name": "...", "resource": "...", "thumbnail": "..."}],
#   "corpora":   {"corpus-id": ["doc-id", ...]},
#   "topics":    {"topic-id": {"items": ["doc-id", ...],
#                              "highlights": [{"item": "doc-id",
#                                              "coordinates": [0, 12],
#                                              "text": ["..."]}]}}
# }

class DocumentSchema(BaseModel):
    id: str
    name: str
    resource: str
    thumbnail: Optional[str] = None


class HighlightSchema(BaseModel):
    item: str
    # Length is checked by the domain when the highlight is built.
    coordinates: List[int]
    text: List[str] = Field(default_factory=list)


class TopicSchema(BaseModel):
    items: List[str] = Field(default_factory=list)
    highlights: List[HighlightSchema] = Field(default_factory=list)


class SourceDumpSchema(BaseModel):
    documents: List[DocumentSchema] = Field(default_factory=list)
    corpora: Dict[str, List[str]] = Field(default_factory=dict)
    topics: Dict[str, TopicSchema] = Field(default_factory=dict)


class JsonHighlightSource(InMemoryHighlightSource):
    """
    Source read once from a JSON dump of documents, corpora and topics.
    """

    def __init__(self, file_path: str):
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {file_path}")

        try:
            dump = SourceDumpSchema.model_validate(
                json.loads(path.read_text(encoding="utf-8"))
            )
        except (json.JSONDecodeError, ValidationError) as error:
            raise RuntimeError(
                f"Failed to read highlight source '{file_path}'.\n"
                f"Original error: {error}"
            ) from error

        super().__init__(
            documents=[
                DocumentRecord(
                    id=d.id,
                    name=d.name,
                    resource=d.resource,
                    thumbnail=d.thumbnail,
                )
                for d in dump.documents
            ],
            corpora=dump.corpora,
            topics={topic_id: t.items for topic_id, t in dump.topics.items()},
            topic_highlights={
                topic_id: [
                    HighlightRecord(
                        parent_item_id=h.item,
                        coordinates=h.coordinates,
                        text=h.text,
                    )
                    for h in t.highlights
                ]
                for topic_id, t in dump.topics.items()
            },
        )

        highlight_count = sum(len(t.highlights) for t in dump.topics.values())
        print(
            f"[JsonSource] Loaded '{path.name}': {len(dump.documents)} documents, "
            f"{len(dump.topics)} topics, {highlight_count} highlights."
        )
