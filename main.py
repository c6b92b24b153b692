# main.py

import sys
from pathlib import Path

from src.infrastructure.json_source import JsonHighlightSource
from src.application.topic_service import TopicComparisonService
from src.interface.cli import (
    display_welcome_banner,
    display_topics,
    prompt_for_operation,
    prompt_for_topics,
    display_item_set,
    display_error,
    ask_continue,
)


DATA_DIRECTORY = "data"
TOPICS_FILE = "topics.json"
MAX_WORKERS = 4
SKIP_UNSUPPORTED_HIGHLIGHTS = True


def main() -> None:
    display_welcome_banner()

    # ── 1. Load the source ───────────────────────────────────────────────────
    try:
        source = JsonHighlightSource(str(Path(DATA_DIRECTORY) / TOPICS_FILE))
    except (FileNotFoundError, RuntimeError) as error:
        display_error(str(error))
        sys.exit(1)

    service = TopicComparisonService(
        source=source,
        max_workers=MAX_WORKERS,
        skip_unsupported=SKIP_UNSUPPORTED_HIGHLIGHTS,
    )

    topic_ids = source.list_topics()
    if not topic_ids:
        display_error(f"No topic found in '{DATA_DIRECTORY}/{TOPICS_FILE}'.")
        sys.exit(1)
    display_topics(topic_ids)

    # ── 2. Interactive comparison loop ───────────────────────────────────────
    while True:
        operation = prompt_for_operation()
        selected = prompt_for_topics()
        try:
            if operation == "union":
                result = service.union(selected)
            else:
                result = service.intersection(selected)
            display_item_set(f"{operation.capitalize()} of {', '.join(selected)}", result)
        except KeyError as error:
            display_error(f"Unknown topic or corpus: {error}")
        except ValueError as error:
            display_error(str(error))

        if not ask_continue():
            break


if __name__ == "__main__":
    main()
