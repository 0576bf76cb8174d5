"""Upload gate — single-file check run before an upload is persisted."""

from __future__ import annotations

import os

from imgcheck.core.inspector import ImageInspector
from imgcheck.core.policy import evaluate
from imgcheck.exceptions import DecodeError, ExtractionUnavailable, FileMissing, UploadRejected
from imgcheck.models.outcome import Failed, FailureKind, ValidationOutcome
from imgcheck.models.policy import Policy
from imgcheck.models.records import Upload
from imgcheck.notify import Notifier, NullNotifier


def inspection_failure(exc: ExtractionUnavailable | DecodeError) -> Failed:
    """Turn an inspector error into a failed outcome (fail-closed)."""
    if isinstance(exc, ExtractionUnavailable):
        return Failed(FailureKind.EXTRACTION_UNAVAILABLE, str(exc))
    return Failed(FailureKind.DECODE_ERROR, str(exc))


def check_image(
    path: str,
    policy: Policy | None = None,
    inspector: ImageInspector | None = None,
) -> ValidationOutcome:
    """Run both rules against one file, stopping at the first failure.

    Raises FileMissing if the path does not exist. Inspector errors are
    returned as failed outcomes rather than raised.
    """
    policy = policy if policy is not None else Policy()
    inspector = inspector if inspector is not None else ImageInspector()

    if not os.path.exists(path):
        raise FileMissing(path)

    try:
        metadata = inspector.extract(path)
    except (ExtractionUnavailable, DecodeError) as exc:
        return inspection_failure(exc)

    return evaluate(metadata, policy.dpi_threshold)


class UploadGate:
    """Callable gate: returns the upload unchanged, or the Failed outcome.

    A rejection sends exactly one message (the first failing rule) to the
    notifier. Hosts that prefer an exception call ``enforce`` instead.
    """

    def __init__(
        self,
        policy: Policy | None = None,
        inspector: ImageInspector | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self.policy = policy if policy is not None else Policy()
        self.inspector = inspector if inspector is not None else ImageInspector()
        self.notifier: Notifier = notifier if notifier is not None else NullNotifier()

    def __call__(self, upload: Upload) -> Upload | Failed:
        outcome = check_image(upload.path, self.policy, self.inspector)
        if isinstance(outcome, Failed):
            self.notifier.error(outcome.message)
            return outcome
        return upload

    def enforce(self, upload: Upload) -> Upload:
        """Like calling the gate, but raises UploadRejected on rejection."""
        result = self(upload)
        if isinstance(result, Failed):
            raise UploadRejected(result)
        return result
