"""Sequential paged batch run over an image record source, with Rich progress."""

from __future__ import annotations

import os
from contextlib import nullcontext

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from imgcheck.core.gate import inspection_failure
from imgcheck.core.inspector import ImageInspector
from imgcheck.core.policy import RULES, evaluate_all
from imgcheck.exceptions import DecodeError, ExtractionUnavailable
from imgcheck.io.sources import DataSource
from imgcheck.models.config import DEFAULT_PAGE_SIZE
from imgcheck.models.metadata import ImageMetadata
from imgcheck.models.outcome import Failed
from imgcheck.models.policy import Policy
from imgcheck.models.records import BatchReport, ImageRecord, RecordOutcome, RecordStatus
from imgcheck.notify import Notifier, NullNotifier


class BatchRunner:
    """Checks every record of a source, one page at a time.

    Unlike the upload gate, both rules are applied to each record so that a
    file can report a DPI failure and a color model failure in the same run.
    """

    def __init__(
        self,
        source: DataSource,
        inspector: ImageInspector | None = None,
        policy: Policy | None = None,
        notifier: Notifier | None = None,
        console: Console | None = None,
    ) -> None:
        self.source = source
        self.inspector = inspector if inspector is not None else ImageInspector()
        self.policy = policy if policy is not None else Policy()
        self.notifier: Notifier = notifier if notifier is not None else NullNotifier()
        self.console = console

    def run(self, page_size: int = DEFAULT_PAGE_SIZE) -> BatchReport:
        if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size < 1:
            raise ValueError(f"page_size must be a positive integer, got {page_size!r}")

        report = BatchReport(page_size=page_size, total=self.source.count_candidates())
        self.notifier.info(
            f"Checking {report.total} parent attachments in batches of {page_size}..."
        )

        progress = self._progress()
        with progress if progress is not None else nullcontext():
            task = None
            if progress is not None:
                task = progress.add_task("Checking", total=report.total)

            offset = 0
            while offset < report.total:
                page = self.source.fetch_page(page_size, offset)
                if not page:
                    break
                report.pages += 1

                for record in page:
                    report.outcomes.append(self._check_record(record, report))
                    if progress is not None and task is not None:
                        progress.advance(task)

                offset += page_size

        self.notifier.success(
            f"Checked {report.checked} attachments. Found {report.errors} errors."
        )
        return report

    def _progress(self) -> Progress | None:
        if self.console is None:
            return None
        return Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]Checking images"),
            BarColumn(bar_width=40),
            MofNCompleteColumn(),
            TextColumn("•"),
            TimeElapsedColumn(),
            console=self.console,
        )

    def _check_record(self, record: ImageRecord, report: BatchReport) -> RecordOutcome:
        path = self.source.resolve_path(record)
        if not path or not os.path.isfile(path):
            self.notifier.warning(f"{record.label} file missing: {path or ''}")
            report.missing += 1
            return RecordOutcome(record=record, status=RecordStatus.MISSING, path=path)

        failures: list[Failed]
        metadata: ImageMetadata | None = None
        try:
            metadata = self.inspector.extract(path)
        except ExtractionUnavailable as exc:
            # Each rule needs the decoder, so each one fails on its own
            failures = [inspection_failure(exc) for _ in RULES]
        except DecodeError as exc:
            failures = [inspection_failure(exc)]
        else:
            failures = evaluate_all(metadata, self.policy.dpi_threshold)

        for failure in failures:
            self.notifier.warning(f"{record.label}: {failure.message}")
        if not failures:
            self.notifier.success(f"{record.label} passed checks.")

        report.checked += 1
        report.errors += len(failures)
        status = RecordStatus.FAILED if failures else RecordStatus.PASSED
        return RecordOutcome(
            record=record, status=status, path=path, metadata=metadata, failures=failures
        )


def run_batch(
    source: DataSource,
    page_size: int = DEFAULT_PAGE_SIZE,
    policy: Policy | None = None,
    notifier: Notifier | None = None,
    console: Console | None = None,
) -> BatchReport:
    """Run a batch check with the default Pillow inspector."""
    runner = BatchRunner(source, policy=policy, notifier=notifier, console=console)
    return runner.run(page_size)
