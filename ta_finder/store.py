"""
store.py — In-memory session state for ta-finder

Public API:
    store   = SessionStore()
    summary = store.ingest(uploaded_file)   # append a CSV export
    summary = store.search("algorithms")    # re-rank every card
    text    = store.render_text()           # best match first

``ingest`` and ``search`` are the only mutators. Neither raises on bad input
files; failures come back as a summary with status "failed" and leave the
existing records untouched.
"""

from __future__ import annotations

import logging
from dataclasses import fields
from typing import Any, Iterable

import pandas as pd

from ta_finder.contracts import build_run_summary
from ta_finder.errors import EncodingError, FileAccessError
from ta_finder.loader import decode_text, read_source
from ta_finder.normalizer import REPLACEMENTS, normalize
from ta_finder.ranking import SkimMatcher, score_all, stable_order
from ta_finder.render import render, render_sentinel
from ta_finder.schema import Record, read_records

logger = logging.getLogger(__name__)

CARD_SEPARATOR = "\n\n"


class SessionStore:
    def __init__(
        self,
        replacements: Iterable[tuple[str, str]] = REPLACEMENTS,
        matcher: SkimMatcher | None = None,
    ) -> None:
        self.replacements = tuple(replacements)
        self.matcher = matcher or SkimMatcher()
        self.records: list[Record] = []
        self.cards: list[str] = []
        self.sort_order: list[int] = []
        self.query = ""
        self.parsed = False

    # ── Mutators ─────────────────────────────────────────────────────────────

    def ingest(self, source: Any) -> dict:
        """
        Parse one CSV export and append its records.

        The batch is built completely before anything is committed: records,
        their cards and one blank spacer pair are appended together, and the
        display order resets to file order.
        """
        try:
            raw = read_source(source)
            text = decode_text(raw)
        except (FileAccessError, EncodingError) as exc:
            logger.warning("Ingest failed: %s", exc)
            return build_run_summary(
                operation="ingest",
                status="failed",
                error=str(exc),
                metrics={"records_total": self.record_count},
            )

        text = normalize(text, self.replacements)
        batch, skipped = read_records(text, start_index=self._next_index())
        batch_cards = [render(record) for record in batch]

        self.records.extend(batch)
        self.cards.extend(batch_cards)
        self.records.append(Record())
        self.cards.append(render_sentinel())
        if batch:
            self.parsed = True
        self.sort_order = list(range(len(self.records)))
        self.query = ""

        logger.info(
            "Ingested %d records (%d rows skipped), %d total",
            len(batch), len(skipped), self.record_count,
        )
        return build_run_summary(
            operation="ingest",
            status="ok",
            warnings=skipped,
            metrics={
                "bytes_read":    len(raw),
                "rows_parsed":   len(batch),
                "rows_skipped":  len(skipped),
                "records_total": self.record_count,
                "first_index":   batch[0].index if batch else None,
                "last_index":    batch[-1].index if batch else None,
            },
        )

    def search(self, query: str) -> dict:
        """Re-score every card against ``query`` and recompute the order."""
        scores = score_all(self.cards, query, self.matcher)
        order = stable_order(scores)

        for record, score in zip(self.records, scores):
            record.score = score
        self.sort_order = order
        self.query = query

        logger.debug("Search %r scored %d cards", query, len(scores))
        return build_run_summary(
            operation="search",
            metrics={
                "query":        query,
                "cards_scored": len(scores),
                "matches":      sum(1 for score in scores if score > 0),
                "top_position": order[-1] if order else None,
            },
        )

    # ── Read-only projections ────────────────────────────────────────────────

    def projection(self) -> list[str]:
        """Cards in sort order (ascending score)."""
        return [self.cards[i] for i in self.sort_order]

    def ranked_cards(self) -> list[str]:
        """Cards best match first, the order the page shows them in."""
        return [self.cards[i] for i in reversed(self.sort_order)]

    def render_text(self) -> str:
        return CARD_SEPARATOR.join(self.ranked_cards())

    @property
    def record_count(self) -> int:
        return sum(1 for record in self.records if not record.is_sentinel)

    def status_line(self) -> str:
        if not self.parsed:
            return ""
        return f"✅ found {self.record_count} records"

    def to_frame(self) -> pd.DataFrame:
        """Real records, best match first, as a table."""
        rows = [
            self.records[i].as_row()
            for i in reversed(self.sort_order)
            if not self.records[i].is_sentinel
        ]
        columns = [f.name for f in fields(Record)]
        return pd.DataFrame(rows, columns=columns)

    def _next_index(self) -> int:
        return max((record.index for record in self.records), default=0) + 1
