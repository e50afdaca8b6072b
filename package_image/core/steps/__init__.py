"""Steps for the package command pipeline."""

from typing import List

from .base import BaseStep
from .setup import SetupContext, SetExtraTags, SetImageId
from .build import SkipIfImageArtifactExists, BuildImage, GenerateSBOM, PushImage
from .sign import SignImage
from .tags import ProcessExtraTags
from .store import LoadImageArtifact, StoreArtifact, StoreResults


def image_steps() -> List[BaseStep]:
    """Steps producing the image, in execution order.

    The image artifact is written last: its presence makes
    SkipIfImageArtifactExists end this phase on later runs.
    """
    return [
        SetupContext(),
        SetExtraTags(),
        SetImageId(),
        SkipIfImageArtifactExists(),
        BuildImage(),
        GenerateSBOM(),
        PushImage(),
        SignImage(),
        StoreArtifact(),
    ]


def publish_steps() -> List[BaseStep]:
    """Steps run after the image phase, whether it was skipped or not."""
    return [
        LoadImageArtifact(),
        ProcessExtraTags(),
        StoreResults(),
    ]


def default_steps() -> List[List[BaseStep]]:
    """Phases of a complete packaging run."""
    return [image_steps(), publish_steps()]


__all__ = [
    "BaseStep",
    "SetupContext",
    "SetExtraTags",
    "SetImageId",
    "SkipIfImageArtifactExists",
    "BuildImage",
    "GenerateSBOM",
    "PushImage",
    "SignImage",
    "LoadImageArtifact",
    "ProcessExtraTags",
    "StoreArtifact",
    "StoreResults",
    "image_steps",
    "publish_steps",
    "default_steps",
]
