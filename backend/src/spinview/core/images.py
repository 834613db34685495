from __future__ import annotations

from spinview.core.config import ViewerConfig

NUMBERED = "numbered"


class ViewerConfigError(ValueError):
    """The configuration cannot describe an image sequence."""

    def __init__(self, problems: list[str]) -> None:
        super().__init__("; ".join(problems))
        self.problems = problems


def validate_image_source(config: ViewerConfig) -> list[str]:
    """Return every reason the image source cannot be resolved (empty if valid)."""
    problems = []
    if config.images is None:
        problems.append("'images' property is missing. Provide a list of images or 'numbered'.")
    elif config.images == NUMBERED:
        if not config.format:
            problems.append(
                "'format' property is missing or invalid. Image format must be provided for 'numbered' property."
            )
        if not config.location:
            problems.append(
                "'location' property is missing or invalid. Image location must be provided for 'numbered' property."
            )
    if not problems and config.frame_count < 1:
        problems.append(f"Image sequence must contain at least one frame, got {config.frame_count}.")
    return problems


def resolve_images(config: ViewerConfig) -> list[str]:
    """Ordered image references for every frame.

    Numbered sequences are named `{location}/{n}.{format}` with n starting at 1.
    """
    problems = validate_image_source(config)
    if problems:
        raise ViewerConfigError(problems)
    if config.images == NUMBERED:
        fmt = config.format.lower()
        return [f"{config.location}/{n}.{fmt}" for n in range(1, config.frame_count + 1)]
    return list(config.images)
