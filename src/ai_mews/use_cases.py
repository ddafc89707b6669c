"""Business logic use cases."""

import json
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Optional

from ai_mews.config import SelectionConfig
from ai_mews.core import (
    ArticleExtractor,
    CandidateError,
    CandidateFailure,
    CurationError,
    DigestDocument,
    DigestNotifier,
    Item,
    PipelineState,
    PostPublisher,
    QualityGateError,
    RunResult,
    ScoredCandidate,
    SearchClient,
    SearchHit,
    SelectionExhausted,
    Summarizer,
)
from ai_mews.core.ranking import select


class CurationPipeline:
    """Drive search results through extraction and summarization into a post.

    States: INIT -> SEARCHED -> SELECTED -> ACCUMULATING -> DONE, or ABORTED
    on any fatal error. A run for a date that already has a post, or outside
    the publish window, ends in SKIPPED without touching external services.
    """

    def __init__(
        self,
        search_client: SearchClient,
        extractor: ArticleExtractor,
        summarizer: Summarizer,
        publisher: PostPublisher,
        notifier: Optional[DigestNotifier] = None,
        query: str = "",
        selection: Optional[SelectionConfig] = None,
        force_overwrite: bool = False,
        force_run: bool = False,
        publish_hour: Optional[int] = None,
        debug_dir: Optional[Path] = None,
    ) -> None:
        self.search_client = search_client
        self.extractor = extractor
        self.summarizer = summarizer
        self.publisher = publisher
        self.notifier = notifier
        self.query = query
        self.selection = selection or SelectionConfig()
        self.force_overwrite = force_overwrite
        self.force_run = force_run
        self.publish_hour = publish_hour
        self.debug_dir = debug_dir
        self.state = PipelineState.INIT

    async def run(self, now: datetime) -> RunResult:
        """Run the pipeline for the local date of ``now``."""
        self.state = PipelineState.INIT
        date_key = now.date()

        if self.publisher.exists(date_key) and not self.force_overwrite:
            self.state = PipelineState.SKIPPED
            return RunResult(
                state=self.state,
                date_key=date_key,
                reason=f"Post for {date_key.isoformat()} already exists",
            )

        if self.publish_hour is not None and not self.force_run and now.hour != self.publish_hour:
            self.state = PipelineState.SKIPPED
            return RunResult(
                state=self.state,
                date_key=date_key,
                reason=f"Outside publish window ({now.hour:02d}:00 local, publishes at {self.publish_hour:02d}:00)",
            )

        try:
            hits = await self._search()
            candidates = self._select(hits)
            items, failures = await self._accumulate(candidates)

            if len(items) < self.selection.min_items:
                raise QualityGateError(produced=len(items), required=self.selection.min_items)

            self.state = PipelineState.DONE
            result = await self._publish(DigestDocument(date_key=date_key, items=items))
            result.failures = failures
        except CurationError:
            self.state = PipelineState.ABORTED
            raise

        if self.debug_dir:
            self._save_debug("run_result", {
                "state": result.state.value,
                "date": date_key.isoformat(),
                "path": str(result.path),
                "items": [asdict(item) for item in items],
                "failures": [asdict(f) for f in failures],
            })

        return result

    async def _search(self) -> list[SearchHit]:
        print("\n" + "=" * 70)
        print("🔎 STAGE 1: SEARCH")
        print("=" * 70)
        print(f"  └─ Query: {self.query}")

        hits = await self.search_client.search(self.query)
        if not hits:
            raise SelectionExhausted("Search returned no results")

        print(f"✓ Results: {len(hits)}")
        self.state = PipelineState.SEARCHED
        return hits

    def _select(self, hits: list[SearchHit]) -> list[ScoredCandidate]:
        print("\n" + "=" * 70)
        print("📊 STAGE 2: RANK AND SELECT")
        print("=" * 70)

        candidates = select(
            hits,
            max_per_host=self.selection.max_per_host,
            limit=self.selection.candidate_limit,
        )
        if not candidates:
            raise SelectionExhausted("No viable candidates after ranking")

        for candidate in candidates:
            print(f"  [{candidate.score:+.1f}] {candidate.url}")
        print(f"✓ Candidates: {len(candidates)} of {len(hits)} (max {self.selection.max_per_host} per host)")

        if self.debug_dir:
            self._save_debug("candidates", [asdict(c) for c in candidates])

        self.state = PipelineState.SELECTED
        return candidates

    async def _accumulate(
        self, candidates: list[ScoredCandidate]
    ) -> tuple[list[Item], list[CandidateFailure]]:
        """Extract and summarize candidates in order until the target is met."""
        print("\n" + "=" * 70)
        print("📝 STAGE 3: EXTRACT AND SUMMARIZE")
        print("=" * 70)

        self.state = PipelineState.ACCUMULATING
        target = self.selection.target_items
        items: list[Item] = []
        failures: list[CandidateFailure] = []

        for i, candidate in enumerate(candidates, 1):
            if len(items) >= target:
                break

            print(f"\n  [{i}/{len(candidates)}] {candidate.title[:70]}")
            print(f"  └─ URL: {candidate.url}")

            try:
                article = await self.extractor.extract(candidate.url)
                item = await self.summarizer.summarize(
                    source_url=candidate.url, title=article.title, text=article.text
                )
            except CandidateError as e:
                print(f"  ⚠️  Skipped ({e.stage}): {e}")
                failures.append(CandidateFailure(url=candidate.url, stage=e.stage, reason=str(e)))
                continue

            items.append(item)
            print(f"  ✓ {item.title}")

        print(f"\n✓ Items: {len(items)}/{target}")
        if failures:
            print(f"⚠️  Skipped candidates: {len(failures)}")
        return items, failures

    async def _publish(self, document: DigestDocument) -> RunResult:
        print("\n" + "=" * 70)
        print("📤 STAGE 4: PUBLISH")
        print("=" * 70)

        path = self.publisher.publish(document, overwrite=self.force_overwrite)

        notified = False
        if self.notifier:
            await self.notifier.send_digest(document)
            notified = True

        return RunResult(
            state=self.state,
            date_key=document.date_key,
            document=document,
            path=path,
            notified=notified,
        )

    def _save_debug(self, name: str, data: object) -> None:
        """Dump JSON to the debug directory."""
        if not self.debug_dir:
            return

        self.debug_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_file = self.debug_dir / f"{name}_{timestamp}.json"
        output_file.write_text(
            json.dumps(data, indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        print(f"📁 Debug: {name} saved to {output_file}")
