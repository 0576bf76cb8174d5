"""Resolution and color model rules — evaluation logic."""

from __future__ import annotations

from imgcheck.models.metadata import ColorSpace, ImageMetadata
from imgcheck.models.outcome import Failed, FailureKind, Passed, ValidationOutcome
from imgcheck.models.policy import DEFAULT_DPI_THRESHOLD, Policy

# Rules applied by the batch path, in reporting order
RULES: tuple[str, ...] = ("dpi", "color_space")


def check_dpi(metadata: ImageMetadata, dpi_threshold: int = DEFAULT_DPI_THRESHOLD) -> Failed | None:
    """Fail when either axis is strictly above the threshold."""
    if metadata.horizontal_dpi > dpi_threshold or metadata.vertical_dpi > dpi_threshold:
        return Failed(
            FailureKind.DPI_TOO_HIGH,
            f"Image DPI resolution is greater than {dpi_threshold}.",
        )
    return None


def check_color_space(metadata: ImageMetadata) -> Failed | None:
    """Only RGB is accepted; CMYK, grayscale and anything else fail."""
    if metadata.color_space is not ColorSpace.RGB:
        return Failed(FailureKind.NON_RGB_COLOR_SPACE, "Image is not in RGB color model.")
    return None


def evaluate(
    metadata: ImageMetadata, dpi_threshold: int = DEFAULT_DPI_THRESHOLD
) -> ValidationOutcome:
    """Apply the DPI rule, then the color space rule. The first failure wins."""
    failure = check_dpi(metadata, dpi_threshold)
    if failure is not None:
        return failure
    failure = check_color_space(metadata)
    if failure is not None:
        return failure
    return Passed()


def evaluate_all(
    metadata: ImageMetadata, dpi_threshold: int = DEFAULT_DPI_THRESHOLD
) -> list[Failed]:
    """Apply both rules independently and return every failure."""
    failures = [check_dpi(metadata, dpi_threshold), check_color_space(metadata)]
    return [f for f in failures if f is not None]


def load_policy(path: str) -> Policy:
    """Load a Policy from a YAML file."""
    import yaml  # type: ignore[import-untyped]

    with open(path) as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        return Policy()

    kwargs = {k: v for k, v in data.items() if k in Policy.__dataclass_fields__}
    return Policy(**kwargs)
